from dataclasses import dataclass


@dataclass
class CrawlMetrics:
    """Core crawling metrics"""
    pages_rendered: int = 0
    search_pages_processed: int = 0
    businesses_scraped: int = 0
    cards_seen: int = 0
    businesses_admitted: int = 0
    duplicates_skipped: int = 0
    requests_failed: int = 0
    requests_dropped: int = 0
    network_idle_timeouts: int = 0
    queue_depth: int = 0
    avg_response_time: float = 0.0
    pages_per_minute: float = 0.0
