"""Tests for URL classification and page dispatch."""

import logging

import pytest
from bs4 import BeautifulSoup

from yelp_scraper.browser import RenderResult
from yelp_scraper.crawler import CrawlRequest, PageDispatcher, RequestKind, classify_url


@pytest.mark.parametrize("url,kind", [
    ("https://www.yelp.com/search?find_desc=pizza&find_loc=SF&start=0", RequestKind.SEARCH),
    ("https://www.yelp.com/biz/joes-pizza", RequestKind.DETAIL),
    ("https://www.yelp.com/biz/joes-pizza?hrid=1", RequestKind.DETAIL),
    ("https://www.yelp.com/search", None),
    ("https://www.yelp.com/user_details?userid=1", None),
    ("https://www.yelp.com/", None),
])
def test_classify_url(url, kind):
    assert classify_url(url) == kind


class RecordingHandlers:
    def __init__(self):
        self.calls = []

    async def search(self, request, soup, result):
        self.calls.append(("search", request.url))

    async def detail(self, request, soup, result):
        self.calls.append(("detail", request.url))


def _page(url):
    return BeautifulSoup("<html></html>", "html.parser"), RenderResult(url=url, html="<html></html>")


@pytest.mark.asyncio
async def test_routes_by_url_shape():
    handlers = RecordingHandlers()
    dispatcher = PageDispatcher(handlers.search, handlers.detail)

    search_url = "https://www.yelp.com/search?find_desc=pizza"
    detail_url = "https://www.yelp.com/biz/joes-pizza"
    assert await dispatcher.dispatch(CrawlRequest(search_url, RequestKind.SEARCH), *_page(search_url))
    assert await dispatcher.dispatch(CrawlRequest(detail_url, RequestKind.DETAIL), *_page(detail_url))

    assert handlers.calls == [("search", search_url), ("detail", detail_url)]


@pytest.mark.asyncio
async def test_url_shape_wins_over_queued_kind():
    handlers = RecordingHandlers()
    dispatcher = PageDispatcher(handlers.search, handlers.detail)
    url = "https://www.yelp.com/biz/joes-pizza"

    await dispatcher.dispatch(CrawlRequest(url, RequestKind.SEARCH), *_page(url))

    assert handlers.calls == [("detail", url)]


@pytest.mark.asyncio
async def test_unrecognized_url_is_dropped_with_warning(caplog):
    handlers = RecordingHandlers()
    dispatcher = PageDispatcher(handlers.search, handlers.detail)
    url = "https://www.yelp.com/about"

    with caplog.at_level(logging.WARNING):
        handled = await dispatcher.dispatch(CrawlRequest(url, RequestKind.DETAIL), *_page(url))

    assert handled is False
    assert handlers.calls == []
    assert "Dropping request with unrecognized URL" in caplog.text
