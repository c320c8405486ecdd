"""
Base Crawler - Queue-driven crawl over search and business pages
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set, Tuple
from bs4 import BeautifulSoup
from .dispatcher import PageDispatcher
from .request import CrawlRequest, RequestKind
from ..browser import PageRenderer, RenderResult, SettleOutcome
from ..config import ScraperInput, build_search_url
from ..deduplication import FrontierStore
from ..emitter import ResultEmitter
from ..error_handler import ErrorHandler, RetryConfig, RequestFailedError
from ..extraction import extract_search_cards, find_search_cards, find_next_page_url, extract_business_detail, extract_reviews
from ..monitoring import MetricsCollector, ProgressReporter
from ..storage import DatasetStorage, ContentType
from ..utils import RateLimiter

logger = logging.getLogger(__name__)


class BaseCrawler:
    """
    Crawler for search results and business detail pages

    A fixed pool of workers drains a FIFO queue. Search pages add detail
    requests (through the frontier's admission gate) and the next search
    page; detail pages are extracted and emitted. The crawl ends once the
    queue is empty and no worker is busy.
    """

    def __init__(self, config: ScraperInput, renderer: PageRenderer,
                 request_timeout: float = 120.0, human_delay: Tuple[float, float] = (1.0, 3.0),
                 retry_base_delay: float = 1.0, report_interval: float = 30.0):
        self.config = config
        self.renderer = renderer
        self.request_timeout = request_timeout

        self.frontier = FrontierStore(config.max_results)
        self.storage = DatasetStorage(config.output_dir)
        self.emitter = ResultEmitter(self.storage)
        self.dispatcher = PageDispatcher(self._handle_search_page, self._handle_detail_page)

        # Built-in pacing and retries
        self.rate_limiter = RateLimiter(config.delay_seconds, human_delay)
        self.error_handler = ErrorHandler(RetryConfig(
            max_attempts=config.max_retries,
            base_delay=retry_base_delay
        ))

        # Built-in monitoring
        self.metrics_collector = MetricsCollector()
        self.progress_reporter = ProgressReporter(self.metrics_collector, report_interval=report_interval)

        self.url_queue: Optional[asyncio.Queue] = None
        self.queued_search_urls: Set[str] = set()
        self.requests_handled = 0
        self.failed_requests: List[str] = []
        self._debug_snapshot_pending = config.debug_snapshot

    @property
    def max_requests_per_crawl(self) -> int:
        return self.config.max_requests_per_crawl

    def add_request(self, request: CrawlRequest):
        """Append a request to the crawl queue"""
        if request.kind == RequestKind.SEARCH:
            if request.url in self.queued_search_urls:
                logger.debug(f"Search page already queued: {request.url}")
                return
            self.queued_search_urls.add(request.url)

        self.url_queue.put_nowait(request)
        self.metrics_collector.update_queue_depth(self.url_queue.qsize())

    async def crawl(self, start_requests: List[CrawlRequest] = None) -> Dict[str, Any]:
        """Main crawling workflow

        Args:
            start_requests: Seed requests; defaults to the first search page for the configured query

        Returns:
            Final run summary
        """
        self.url_queue = asyncio.Queue()

        if start_requests is None:
            start_url = build_search_url(self.config.search_query, self.config.location, 0)
            logger.info(f"🔗 Starting URL: {start_url}")
            start_requests = [CrawlRequest(start_url, RequestKind.SEARCH)]

        for request in start_requests:
            self.add_request(request)

        async with self.renderer:
            await self.progress_reporter.start_reporting()

            workers = [
                asyncio.create_task(self._worker(worker_id))
                for worker_id in range(self.config.max_concurrency)
            ]

            try:
                await self.url_queue.join()
            finally:
                for worker in workers:
                    worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)
                await self.progress_reporter.stop_reporting()

        summary = self.get_summary()
        self._log_summary(summary)
        return summary

    async def _worker(self, worker_id: int):
        """Pull requests off the queue until cancelled"""
        while True:
            request = await self.url_queue.get()
            try:
                await self._process_request(request)
            except Exception as e:
                # One broken page must not take the worker down with it
                logger.exception(f"Critical error processing {request.url} in worker {worker_id}: {e}")
                self.failed_requests.append(request.url)
                self.metrics_collector.record_failure(request.url)
            finally:
                self.url_queue.task_done()
                self.metrics_collector.update_queue_depth(self.url_queue.qsize())

    async def _process_request(self, request: CrawlRequest):
        """Run one request through the retry policy, or drop it past the request budget"""
        if self.requests_handled >= self.max_requests_per_crawl:
            logger.info(f"Request limit ({self.max_requests_per_crawl}) reached, dropping {request.url}")
            self.metrics_collector.record_dropped(request.url)
            return
        self.requests_handled += 1

        try:
            await self.error_handler.execute_with_retry(self._handle_request, request.url, request)
        except RequestFailedError as e:
            self._handle_failed_request(request, e)

    async def _handle_request(self, request: CrawlRequest):
        """One attempt at a request: pacing, render, parse and dispatch, bounded by request_timeout"""
        await asyncio.wait_for(self._render_and_dispatch(request), timeout=self.request_timeout)

    async def _render_and_dispatch(self, request: CrawlRequest):
        await self.rate_limiter.wait_before_navigation(request.url)

        result = await self.renderer.render(request.url, pause=self.rate_limiter.next_human_delay())

        settled = result.settle == SettleOutcome.SETTLED
        if not settled:
            logger.warning(f"Network idle timeout - continuing anyway: {request.url}")
        self.metrics_collector.record_page_rendered(request.url, result.response_time, settled)

        soup = BeautifulSoup(result.html, 'html.parser')
        await self.dispatcher.dispatch(request, soup, result)

    def _handle_failed_request(self, request: CrawlRequest, error: RequestFailedError):
        """Log a request that ran out of attempts and move on"""
        self.failed_requests.append(request.url)
        self.metrics_collector.record_failure(request.url)
        logger.error(
            f"❌ Request failed after {error.attempts} attempt(s): {request.url} "
            f"- Error: {', '.join(error.error_messages)}"
        )

    async def _handle_search_page(self, request: CrawlRequest, soup: BeautifulSoup, result: RenderResult):
        """Admit new businesses from a search page and queue the next page"""
        logger.info(f"🔍 Processing search page: {request.url}")

        if self._debug_snapshot_pending:
            self._debug_snapshot_pending = False
            await self._save_debug_snapshot(soup, result)

        summaries = extract_search_cards(soup)
        admitted = 0
        duplicates_before = self.frontier.get_stats()['duplicate_urls']

        for summary in summaries:
            if not self.frontier.try_claim(summary.business_url):
                continue
            self.add_request(CrawlRequest(summary.business_url, RequestKind.DETAIL, carried_summary=summary))
            admitted += 1

        logger.info(f"   Found {admitted} unique businesses on this page")
        duplicates = self.frontier.get_stats()['duplicate_urls'] - duplicates_before
        self.metrics_collector.record_search_page(len(summaries), admitted, duplicates)

        if self.frontier.cap_reached:
            return

        next_url = find_next_page_url(soup)
        if next_url:
            logger.info("   Navigating to next page...")
            self.add_request(CrawlRequest(next_url, RequestKind.SEARCH))
        else:
            logger.info("   No more search pages found")

    async def _handle_detail_page(self, request: CrawlRequest, soup: BeautifulSoup, result: RenderResult):
        """Extract a business page and emit its record"""
        logger.info(f"📄 Processing business: {request.url}")

        detail = extract_business_detail(soup, request.url)
        reviews = []
        if self.config.include_reviews:
            reviews = list(extract_reviews(soup, self.config.max_reviews_per_business))

        await self.emitter.emit(detail, reviews)
        self.metrics_collector.record_business_scraped(request.url)

        logger.info(f"   Rating: {detail.rating}⭐ | Reviews: {detail.review_count}")
        self.progress_reporter.log_progress(self.frontier.business_count, self.config.max_results)

    async def _save_debug_snapshot(self, soup: BeautifulSoup, result: RenderResult):
        """Store the first search page's HTML and log what the card selectors see"""
        path = await self.storage.set_value('DEBUG_SEARCH_HTML', result.html, ContentType.HTML)
        if path:
            logger.info(f"🐛 DEBUG: Saved search page HTML to {path}")

        test_ids = []
        for node in soup.select('div[data-testid]')[:20]:
            test_id = node.get('data-testid')
            if test_id not in test_ids:
                test_ids.append(test_id)

        logger.info(f"🐛 DEBUG: Found {len(find_search_cards(soup))} result cards")
        logger.info(f"🐛 DEBUG: Found {len(soup.select('div[data-testid]'))} total divs with data-testid")
        logger.info(f"🐛 DEBUG: Sample data-testid values: {', '.join(test_ids)}")

    def get_summary(self) -> Dict[str, Any]:
        """Final counts for the run"""
        return {
            'businesses_scraped': self.frontier.business_count,
            'unique_businesses': len(self.frontier.seen_urls),
            'records_emitted': self.emitter.emitted_count,
            'dataset_items': self.storage.get_info()['item_count'],
            'requests_handled': self.requests_handled,
            'failed_requests': len(self.failed_requests),
            'errors': self.error_handler.get_error_summary()
        }

    def _log_summary(self, summary: Dict[str, Any]):
        logger.info("🎉 Scraping completed!")
        logger.info(f"   Total businesses scraped: {summary['businesses_scraped']}")
        logger.info(f"   Unique businesses: {summary['unique_businesses']}")
        logger.info(f"   Dataset items: {summary['dataset_items']}")
        if summary['failed_requests']:
            logger.info(f"   Failed requests: {summary['failed_requests']}")
