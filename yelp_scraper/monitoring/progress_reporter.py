import time
import asyncio
import logging
from typing import Dict, Any
from .metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Reports crawl progress and statistics"""

    def __init__(self, metrics_collector: MetricsCollector, report_interval: float = 30.0):
        self.metrics = metrics_collector
        self.report_interval = report_interval
        self.reporting_task = None

    async def start_reporting(self):
        """Start periodic progress reporting"""
        self.reporting_task = asyncio.create_task(self._reporting_loop())

    async def stop_reporting(self):
        """Stop progress reporting"""
        if self.reporting_task:
            self.reporting_task.cancel()
            try:
                await self.reporting_task
            except asyncio.CancelledError:
                pass
            self.reporting_task = None

    async def _reporting_loop(self):
        """Main reporting loop"""
        while True:
            await asyncio.sleep(self.report_interval)
            self.log_snapshot()
            self.metrics.store_historical_snapshot()

    def log_progress(self, business_count: int, max_results: int):
        """Log detail progress against the result cap"""
        progress = round(business_count / max_results * 100) if max_results else 100
        logger.info(f"📊 Progress: {business_count}/{max_results} ({progress}%)")

    def log_snapshot(self):
        """Log a one-line snapshot of the crawl so far"""
        snapshot = self.metrics.get_current_snapshot()
        crawl_metrics = snapshot['crawl_metrics']
        system_metrics = snapshot['system_metrics']

        logger.info(
            f"📊 Pages: {crawl_metrics['pages_rendered']} | "
            f"Businesses: {crawl_metrics['businesses_scraped']} | "
            f"Queue: {crawl_metrics['queue_depth']} | "
            f"Failed: {crawl_metrics['requests_failed']} | "
            f"Memory: {system_metrics['process_memory_mb']:.0f} MB"
        )

    def get_final_report(self) -> Dict[str, Any]:
        """Generate final crawl report"""
        snapshot = self.metrics.get_current_snapshot()
        crawl_metrics = self.metrics.crawl_metrics
        elapsed_time = time.time() - self.metrics.start_time

        return {
            'final_snapshot': snapshot,
            'performance_summary': {
                'total_runtime_minutes': elapsed_time / 60,
                'pages_per_minute': crawl_metrics.pages_per_minute,
                'avg_response_time': crawl_metrics.avg_response_time,
                'network_idle_timeout_rate': (
                    crawl_metrics.network_idle_timeouts / crawl_metrics.pages_rendered * 100
                ) if crawl_metrics.pages_rendered > 0 else 0
            }
        }
