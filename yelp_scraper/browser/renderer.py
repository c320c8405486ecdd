import asyncio
import logging
import time
from abc import ABC, abstractmethod
from playwright.async_api import async_playwright, Page
from .proxy import ProxyConfiguration
from .result import RenderResult, SettleOutcome
from .stealth import (
    STEALTH_HEADERS, STEALTH_LAUNCH_ARGS, WEBDRIVER_OVERRIDE_SCRIPT,
    DEFAULT_VIEWPORT, get_random_user_agent
)
from ..error_handler import HttpStatusError

logger = logging.getLogger(__name__)


class PageRenderer(ABC):
    """Interface for anything that turns a URL into rendered HTML"""

    async def __aenter__(self):
        """Async context manager entry"""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    @abstractmethod
    async def start(self) -> None:
        """Acquire rendering resources"""
        pass

    @abstractmethod
    async def render(self, url: str, pause: float = 0.0) -> RenderResult:
        """Navigate to url, let it settle, wait pause seconds, return the HTML"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release rendering resources"""
        pass


class PlaywrightRenderer(PageRenderer):
    """Headless Chromium renderer with stealth headers and optional proxies"""

    def __init__(self, headless: bool = True, navigation_timeout: float = 60.0,
                 network_idle_timeout: float = 30.0, proxy_configuration: ProxyConfiguration = None,
                 viewport: dict = None):
        self.headless = headless
        self.navigation_timeout = navigation_timeout
        self.network_idle_timeout = network_idle_timeout
        self.proxy_configuration = proxy_configuration or ProxyConfiguration()
        self.viewport = viewport or DEFAULT_VIEWPORT
        self.playwright = None
        self.browser = None

    async def start(self):
        """Initialize browser instance"""
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=self.headless,
                args=STEALTH_LAUNCH_ARGS
            )
            logger.info(f"Browser started (headless={self.headless}, proxies={self.proxy_configuration.enabled})")

        except Exception as e:
            logger.error(f"Failed to start browser: {e}")
            await self.close()
            raise

    async def close(self):
        """Clean up browser resources"""
        try:
            if self.browser:
                await self.browser.close()
            if self.playwright:
                await self.playwright.stop()
        except Exception as e:
            logger.error(f"Error closing browser: {e}")
        finally:
            self.browser = None
            self.playwright = None

    async def wait_for_network_idle(self, page: Page) -> SettleOutcome:
        """Wait for network quiescence, giving up after network_idle_timeout"""
        idle = asyncio.ensure_future(page.wait_for_load_state('networkidle', timeout=0))
        done, _ = await asyncio.wait({idle}, timeout=self.network_idle_timeout)

        if idle in done and idle.exception() is None:
            return SettleOutcome.SETTLED

        idle.cancel()
        return SettleOutcome.TIMED_OUT

    async def render(self, url: str, pause: float = 0.0) -> RenderResult:
        """
        Render a page in a fresh browser context

        Args:
            url: URL to load
            pause: Seconds to linger on the page after it settles

        Returns:
            RenderResult with the post-JavaScript HTML
        """
        if not self.browser:
            raise RuntimeError("Browser not initialized. Use 'async with' or call start() first")

        start_time = time.time()
        context_options = {
            'viewport': self.viewport,
            'user_agent': get_random_user_agent(),
            'extra_http_headers': STEALTH_HEADERS
        }
        proxy = self.proxy_configuration.new_proxy()
        if proxy:
            context_options['proxy'] = proxy

        context = await self.browser.new_context(**context_options)
        try:
            await context.add_init_script(WEBDRIVER_OVERRIDE_SCRIPT)
            page = await context.new_page()

            response = await page.goto(
                url, wait_until='domcontentloaded', timeout=self.navigation_timeout * 1000
            )
            status_code = response.status if response is not None else None
            if status_code is not None and status_code >= 400:
                raise HttpStatusError(url, status_code)

            settle = await self.wait_for_network_idle(page)

            if pause > 0:
                await page.wait_for_timeout(pause * 1000)

            html = await page.content()

            return RenderResult(
                url=url,
                html=html,
                settle=settle,
                status_code=status_code,
                response_time=time.time() - start_time
            )

        finally:
            await context.close()
