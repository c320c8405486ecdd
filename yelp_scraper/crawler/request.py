from enum import Enum
from dataclasses import dataclass
from typing import Optional
from ..models import SearchCardSummary


class RequestKind(Enum):
    """The two kinds of pages the crawler visits"""
    SEARCH = "search"
    DETAIL = "detail"


@dataclass
class CrawlRequest:
    """A unit of work in the crawl queue"""
    url: str
    kind: RequestKind
    carried_summary: Optional[SearchCardSummary] = None
