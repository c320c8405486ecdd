"""
Page Dispatcher - Routes rendered pages to the search or detail handler
"""

import logging
from typing import Awaitable, Callable, Optional
from urllib.parse import urlparse
from bs4 import BeautifulSoup
from .request import CrawlRequest, RequestKind
from ..browser import RenderResult

logger = logging.getLogger(__name__)

PageHandler = Callable[[CrawlRequest, BeautifulSoup, RenderResult], Awaitable[None]]


def classify_url(url: str) -> Optional[RequestKind]:
    """Search results live under /search with a query; listings under /biz/"""
    parsed = urlparse(url)

    if parsed.path.rstrip('/') == '/search' and parsed.query:
        return RequestKind.SEARCH
    if '/biz/' in parsed.path:
        return RequestKind.DETAIL
    return None


class PageDispatcher:
    """Dispatches a parsed page to the handler for its URL shape"""

    def __init__(self, search_handler: PageHandler, detail_handler: PageHandler):
        self.handlers = {
            RequestKind.SEARCH: search_handler,
            RequestKind.DETAIL: detail_handler
        }

    async def dispatch(self, request: CrawlRequest, soup: BeautifulSoup, result: RenderResult) -> bool:
        """
        Route a page to its handler

        Returns:
            False if the URL matched neither shape and the page was dropped
        """
        kind = classify_url(request.url)

        if kind is None:
            logger.warning(f"Dropping request with unrecognized URL: {request.url}")
            return False

        if kind != request.kind:
            logger.debug(f"Request for {request.url} was queued as {request.kind.value}, handling as {kind.value}")

        await self.handlers[kind](request, soup, result)
        return True
