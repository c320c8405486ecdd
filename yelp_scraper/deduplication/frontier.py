import logging
import threading
from typing import Set, Dict, Any
from .url_canonicalizer import URLCanonicalizer

logger = logging.getLogger(__name__)


class FrontierStore:
    """
    Admission control for detail requests

    Tracks canonical business URLs already enqueued and a running count
    bounded by max_results. try_claim is the only way in.
    """

    def __init__(self, max_results: int, canonicalizer: URLCanonicalizer = None):
        if max_results < 0:
            raise ValueError("max_results must be non-negative")

        self.max_results = max_results
        self.url_canonicalizer = canonicalizer or URLCanonicalizer()

        self.seen_urls: Set[str] = set()
        self._business_count = 0

        # Statistics
        self.stats = {
            'claims_attempted': 0,
            'duplicate_urls': 0,
            'refused_at_cap': 0
        }

        self._lock = threading.Lock()

    @property
    def business_count(self) -> int:
        return self._business_count

    @property
    def cap_reached(self) -> bool:
        return self._business_count >= self.max_results

    def try_claim(self, url: str) -> bool:
        """
        Claim a business URL for a detail request

        Args:
            url: Listing URL (canonicalized before the membership check)

        Returns:
            True if the URL was admitted and the count incremented
        """
        canonical_url = self.url_canonicalizer.canonicalize(url)

        with self._lock:
            self.stats['claims_attempted'] += 1

            if canonical_url in self.seen_urls:
                self.stats['duplicate_urls'] += 1
                return False

            if self._business_count >= self.max_results:
                self.stats['refused_at_cap'] += 1
                return False

            self.seen_urls.add(canonical_url)
            self._business_count += 1

        logger.debug(f"Claimed {canonical_url} ({self._business_count}/{self.max_results})")
        return True

    def get_stats(self) -> Dict[str, Any]:
        """Get admission statistics"""
        with self._lock:
            return {
                **self.stats,
                'business_count': self._business_count,
                'unique_businesses': len(self.seen_urls),
                'max_results': self.max_results
            }
