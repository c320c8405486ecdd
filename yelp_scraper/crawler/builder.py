"""
Crawler Builder - Fluent API for assembling a crawler from its input
"""

from .base import BaseCrawler
from ..browser import PageRenderer, PlaywrightRenderer, ProxyConfiguration
from ..config import ScraperInput


class CrawlerBuilder:
    """Builder for creating crawlers with optional collaborator overrides"""

    def __init__(self, config: ScraperInput):
        self.config = config
        self._renderer = None
        self._request_timeout = 120.0
        self._navigation_timeout = 60.0
        self._network_idle_timeout = 30.0
        self._human_delay = (1.0, 3.0)
        self._retry_base_delay = 1.0

    def with_renderer(self, renderer: PageRenderer):
        """Use a custom renderer instead of headless Chromium"""
        self._renderer = renderer
        return self

    def timeouts(self, request: float = 120.0, navigation: float = 60.0, network_idle: float = 30.0):
        """Set per-request, navigation and network idle timeouts in seconds"""
        self._request_timeout = request
        self._navigation_timeout = navigation
        self._network_idle_timeout = network_idle
        return self

    def human_delay(self, low: float, high: float):
        """Set the randomized pause range applied after a page settles"""
        self._human_delay = (low, high)
        return self

    def retry_backoff(self, base_delay: float):
        """Set the base delay for exponential retry backoff"""
        self._retry_base_delay = base_delay
        return self

    def _default_renderer(self) -> PageRenderer:
        return PlaywrightRenderer(
            headless=self.config.headless,
            navigation_timeout=self._navigation_timeout,
            network_idle_timeout=self._network_idle_timeout,
            proxy_configuration=ProxyConfiguration(self.config.proxy_urls)
        )

    def build(self) -> BaseCrawler:
        """Build the configured crawler"""
        return BaseCrawler(
            self.config,
            renderer=self._renderer or self._default_renderer(),
            request_timeout=self._request_timeout,
            human_delay=self._human_delay,
            retry_base_delay=self._retry_base_delay
        )
