import logging
from urllib.parse import urljoin, urlparse, urlunparse

SITE_ORIGIN = "https://www.yelp.com"


class URLCanonicalizer:
    """Listing URL canonicalization used as the dedup key"""

    def __init__(self, origin: str = SITE_ORIGIN):
        self.origin = origin.rstrip('/')

    def resolve(self, href: str) -> str:
        """Resolve a possibly relative link against the site origin"""
        href = href.strip()
        if href.startswith(('http://', 'https://')):
            return href
        return urljoin(self.origin + '/', href)

    def canonicalize(self, url: str) -> str:
        """
        Canonicalize a listing URL to scheme + host + path

        Args:
            url: Absolute or site-relative URL

        Returns:
            Canonical URL string without query string or fragment
        """
        try:
            parsed = urlparse(self.resolve(url))

            return urlunparse((
                parsed.scheme.lower(),
                parsed.netloc.lower(),
                parsed.path,
                '',  # params
                '',  # query
                ''   # fragment
            ))

        except ValueError as e:
            logging.warning(f"Failed to canonicalize URL {url}: {e}")
            return url.split('?')[0].split('#')[0].strip()
