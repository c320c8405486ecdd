import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List
from urllib.parse import urlencode
from .deduplication import SITE_ORIGIN

logger = logging.getLogger(__name__)

SEARCH_PATH = '/search'

# Actor-style camelCase input keys -> ScraperInput fields
INPUT_KEYS = {
    'searchQuery': 'search_query',
    'location': 'location',
    'maxResults': 'max_results',
    'includeReviews': 'include_reviews',
    'maxReviewsPerBusiness': 'max_reviews_per_business',
    'delayBetweenRequests': 'delay_between_requests',
    'maxRetries': 'max_retries',
    'maxConcurrency': 'max_concurrency',
    'headless': 'headless',
    'proxyUrls': 'proxy_urls',
    'outputDir': 'output_dir',
    'debugSnapshot': 'debug_snapshot'
}


INT_FIELDS = ('max_results', 'max_reviews_per_business', 'delay_between_requests', 'max_retries', 'max_concurrency')
BOOL_FIELDS = ('include_reviews', 'headless', 'debug_snapshot')


class ConfigError(Exception):
    """Invalid or incomplete scraper input"""
    pass


@dataclass
class ScraperInput:
    """Input configuration for one scraping run"""
    search_query: str = ""
    location: str = ""
    max_results: int = 50
    include_reviews: bool = True
    max_reviews_per_business: int = 5
    delay_between_requests: int = 2000  # milliseconds
    max_retries: int = 3
    max_concurrency: int = 2
    headless: bool = True
    proxy_urls: List[str] = field(default_factory=list)
    output_dir: str = "crawl_data"
    debug_snapshot: bool = True

    def __post_init__(self):
        for name in ('search_query', 'location', 'output_dir'):
            if getattr(self, name) is not None and not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string")

        self.search_query = (self.search_query or "").strip()
        self.location = (self.location or "").strip()

        if not self.search_query or not self.location:
            raise ConfigError("Both searchQuery and location are required!")

        # bool is an int subclass; reject it for numeric fields
        for name in INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        for name in BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")
        if not isinstance(self.proxy_urls, list) or not all(isinstance(url, str) for url in self.proxy_urls):
            raise ConfigError("proxy_urls must be a list of strings")

        for name in ('max_results', 'max_reviews_per_business', 'delay_between_requests'):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be non-negative")
        if self.max_retries < 1:
            raise ConfigError("max_retries must be at least 1")
        if self.max_concurrency < 1:
            raise ConfigError("max_concurrency must be at least 1")

    @property
    def delay_seconds(self) -> float:
        return self.delay_between_requests / 1000.0

    @property
    def max_requests_per_crawl(self) -> int:
        """Upper bound on processed requests: every detail page plus pagination headroom"""
        return self.max_results + 50

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScraperInput':
        """Build from camelCase input keys (snake_case accepted too)"""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = INPUT_KEYS.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown input field: {key}")
                continue
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)


def load_input(path) -> Dict[str, Any]:
    """Read raw input fields from a JSON file"""
    input_path = Path(path)
    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Input file not found: {input_path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Input file {input_path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Input file {input_path} must contain a JSON object")
    return data


def build_search_url(query: str, location: str, offset: int = 0) -> str:
    """Build a search results URL for query in location starting at offset"""
    params = urlencode({
        'find_desc': query,
        'find_loc': location,
        'start': str(offset)
    })
    return f"{SITE_ORIGIN}{SEARCH_PATH}?{params}"
