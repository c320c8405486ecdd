import time
import psutil
import logging
import threading
from datetime import datetime
from dataclasses import asdict
from typing import Dict, Any
from collections import deque
from .crawl_metrics import CrawlMetrics
from .system_metrics import SystemMetrics

logger = logging.getLogger(__name__)


class MetricsCollector:
    """Collects and aggregates crawl metrics"""

    def __init__(self):
        self.start_time = time.time()

        self.crawl_metrics = CrawlMetrics()
        self.system_metrics = SystemMetrics()

        # Historical data (keep last 100 data points)
        self.metrics_history: deque = deque(maxlen=100)
        self.response_times: deque = deque(maxlen=100)

        self._lock = threading.Lock()

    def record_page_rendered(self, url: str, response_time: float, settled: bool = True):
        """Record a page that rendered successfully"""
        with self._lock:
            self.crawl_metrics.pages_rendered += 1
            self.response_times.append(response_time)
            if not settled:
                self.crawl_metrics.network_idle_timeouts += 1
            self._update_calculated_metrics()

    def record_search_page(self, cards_found: int, businesses_admitted: int, duplicates: int):
        """Record a processed search results page

        Cards refused because the result cap was reached are neither admitted nor duplicates.
        """
        with self._lock:
            self.crawl_metrics.search_pages_processed += 1
            self.crawl_metrics.cards_seen += cards_found
            self.crawl_metrics.businesses_admitted += businesses_admitted
            self.crawl_metrics.duplicates_skipped += duplicates

    def record_business_scraped(self, url: str):
        with self._lock:
            self.crawl_metrics.businesses_scraped += 1

    def record_failure(self, url: str):
        with self._lock:
            self.crawl_metrics.requests_failed += 1

    def record_dropped(self, url: str):
        with self._lock:
            self.crawl_metrics.requests_dropped += 1

    def update_queue_depth(self, depth: int):
        """Update current crawl queue depth"""
        with self._lock:
            self.crawl_metrics.queue_depth = depth

    def collect_system_metrics(self):
        """Collect current system resource metrics"""
        try:
            self.system_metrics.cpu_percent = psutil.cpu_percent(interval=None)
            memory = psutil.virtual_memory()
            self.system_metrics.memory_used_mb = memory.used / (1024 * 1024)
            self.system_metrics.memory_percent = memory.percent
            self.system_metrics.process_memory_mb = psutil.Process().memory_info().rss / (1024 * 1024)

        except (psutil.Error, OSError) as e:
            logger.warning(f"Failed to collect system metrics: {e}")

    def _update_calculated_metrics(self):
        """Update rates and averages"""
        elapsed_time = time.time() - self.start_time

        if elapsed_time > 0:
            self.crawl_metrics.pages_per_minute = self.crawl_metrics.pages_rendered / elapsed_time * 60

        if self.response_times:
            self.crawl_metrics.avg_response_time = sum(self.response_times) / len(self.response_times)

    def get_current_snapshot(self) -> Dict[str, Any]:
        """Get current metrics snapshot"""
        with self._lock:
            self.collect_system_metrics()

            return {
                'timestamp': datetime.now().isoformat(),
                'uptime_seconds': time.time() - self.start_time,
                'crawl_metrics': asdict(self.crawl_metrics),
                'system_metrics': asdict(self.system_metrics)
            }

    def store_historical_snapshot(self):
        """Store current metrics in historical data"""
        self.metrics_history.append(self.get_current_snapshot())
