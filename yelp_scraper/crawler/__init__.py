"""
Crawler - queue-driven search and detail page crawling
"""

from .base import BaseCrawler
from .builder import CrawlerBuilder
from .dispatcher import PageDispatcher, classify_url
from .request import CrawlRequest, RequestKind

__all__ = ['BaseCrawler', 'CrawlerBuilder', 'PageDispatcher', 'classify_url', 'CrawlRequest', 'RequestKind']
