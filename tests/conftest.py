import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Make the repository root importable when running pytest from a checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from yelp_scraper.browser import PageRenderer, RenderResult, SettleOutcome
from yelp_scraper.config import ScraperInput
from yelp_scraper.error_handler import HttpStatusError


class FakeRenderer(PageRenderer):
    """Serves canned HTML by URL; failures maps URL -> exception raised on every attempt"""

    def __init__(self, pages: Dict[str, str], failures: Optional[Dict[str, Exception]] = None,
                 timed_out: Optional[List[str]] = None):
        self.pages = pages
        self.failures = failures or {}
        self.timed_out = set(timed_out or [])
        self.calls: List[str] = []
        self.started = False
        self.closed = False

    async def start(self):
        self.started = True

    async def close(self):
        self.closed = True

    async def render(self, url, pause=0.0):
        self.calls.append(url)
        if url in self.failures:
            raise self.failures[url]
        if url not in self.pages:
            raise HttpStatusError(url, 404)

        settle = SettleOutcome.TIMED_OUT if url in self.timed_out else SettleOutcome.SETTLED
        return RenderResult(url=url, html=self.pages[url], settle=settle, status_code=200)


def card_html(slug, name=None, rating=None, reviews=None, with_link=True):
    parts = ['<div data-testid="serp-ia-card">']
    if with_link:
        parts.append(f'<h3><a href="/biz/{slug}?osq=pizza&hrid=x1">{name or ""}</a></h3>')
    else:
        parts.append(f'<h3>{name or "Sponsored"}</h3>')
    if rating is not None:
        parts.append(f'<div role="img" aria-label="{rating} star rating"></div>')
    if reviews is not None:
        parts.append(f'<span>({reviews} reviews)</span>')
    parts.append('</div>')
    return ''.join(parts)


def search_page_html(cards, next_href=None):
    body = ''.join(cards)
    if next_href:
        body += f'<a aria-label="Next Page" href="{next_href}">Next</a>'
    return f'<html><body><main>{body}</main></body></html>'


def detail_page_html(name, rating=4.0, review_count=10, address="100 Main St, San Francisco, CA 94103"):
    return (
        '<html><body>'
        f'<h1>{name}</h1>'
        f'<div role="img" aria-label="{rating} star rating"></div>'
        f'<a href="#reviews">{review_count} reviews</a>'
        f'<p>{address}</p>'
        '<div class="review-item"><a href="/user_details?userid=u1">Sam K.</a>'
        '<p class="comment-text">Really solid spot, would definitely come back again.</p></div>'
        '</body></html>'
    )


@pytest.fixture
def scraper_input(tmp_path):
    return ScraperInput(
        search_query="pizza",
        location="San Francisco, CA",
        max_results=5,
        delay_between_requests=0,
        max_retries=3,
        output_dir=str(tmp_path / "crawl_data"),
        debug_snapshot=False
    )
