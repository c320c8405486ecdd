import itertools
import logging
import threading
from typing import Dict, List, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class ProxyConfiguration:
    """Round-robin over a fixed list of proxy URLs"""

    def __init__(self, proxy_urls: Optional[List[str]] = None):
        self.proxy_urls = [url.strip() for url in (proxy_urls or []) if url and url.strip()]
        for url in self.proxy_urls:
            parsed = urlparse(url)
            if not parsed.scheme or not parsed.hostname:
                raise ValueError(f"Invalid proxy URL: {url}")

        self._cycle = itertools.cycle(self.proxy_urls) if self.proxy_urls else None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.proxy_urls)

    def new_proxy(self) -> Optional[Dict[str, str]]:
        """
        Next proxy in Playwright's proxy settings format

        Returns:
            {'server': ..., 'username': ..., 'password': ...} or None without proxies
        """
        if self._cycle is None:
            return None

        with self._lock:
            url = next(self._cycle)

        parsed = urlparse(url)
        server = f"{parsed.scheme}://{parsed.hostname}"
        if parsed.port:
            server += f":{parsed.port}"

        proxy = {'server': server}
        if parsed.username:
            proxy['username'] = parsed.username
        if parsed.password:
            proxy['password'] = parsed.password
        return proxy
