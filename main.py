#!/usr/bin/env python3
"""
Yelp Business Scraper
Scrapes business listings, details and reviews from Yelp search results
"""

import argparse
import asyncio
import sys
from pathlib import Path
from yelp_scraper.config import ConfigError, ScraperInput, load_input
from yelp_scraper.crawler import CrawlerBuilder
from yelp_scraper.monitoring import LogManager


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scrape Yelp business listings for a search query and location")
    parser.add_argument('--input', help="JSON input file with actor-style fields (searchQuery, location, ...)")
    parser.add_argument('--search-query', dest='searchQuery')
    parser.add_argument('--location')
    parser.add_argument('--max-results', dest='maxResults', type=int)
    parser.add_argument('--no-reviews', dest='includeReviews', action='store_false', default=None)
    parser.add_argument('--max-reviews', dest='maxReviewsPerBusiness', type=int)
    parser.add_argument('--delay', dest='delayBetweenRequests', type=int, help="Delay before each navigation in ms")
    parser.add_argument('--max-retries', dest='maxRetries', type=int)
    parser.add_argument('--concurrency', dest='maxConcurrency', type=int)
    parser.add_argument('--proxy', dest='proxyUrls', action='append', help="Proxy URL, may be repeated")
    parser.add_argument('--output-dir', dest='outputDir')
    parser.add_argument('--headful', dest='headless', action='store_false', default=None)
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def build_input(args) -> ScraperInput:
    """Merge the input file with command line overrides"""
    raw = load_input(args.input) if args.input else {}
    overrides = {
        key: value for key, value in vars(args).items()
        if key not in ('input', 'log_level') and value is not None
    }
    raw.update(overrides)
    return ScraperInput.from_dict(raw)


async def main(config: ScraperInput, log_manager: LogManager):
    """Main entry point for the scraper"""
    print(f"   Search: \"{config.search_query}\" in \"{config.location}\"")
    print(f"   Max Results: {config.max_results}")
    print(f"   Include Reviews: {'Yes' if config.include_reviews else 'No'}")
    if config.proxy_urls:
        print(f"🔒 {len(config.proxy_urls)} proxies enabled")

    crawler = CrawlerBuilder(config).build()
    try:
        await crawler.crawl()
    finally:
        log_manager.export_metrics_json(crawler.progress_reporter.get_final_report(), "final_crawl_metrics.json")


def run(argv=None):
    print("🚀 Starting Yelp Business Scraper")
    args = parse_args(argv)
    try:
        scraper_input = build_input(args)
        log_manager = LogManager(log_dir=str(Path(scraper_input.output_dir) / "logs"), log_level=args.log_level)
        asyncio.run(main(scraper_input, log_manager))
    except ConfigError as e:
        print(f"❌ Fatal error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n🛑 Scraper stopped by user")
        return
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        sys.exit(1)
    print("✅ Scraping completed!")


if __name__ == "__main__":
    run()
