import asyncio
import random
import logging
from typing import Tuple

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Request pacing for browser navigation

    A fixed delay is applied before every navigation, and a randomized
    human-like pause once a page has settled.
    """

    def __init__(self, delay_between_requests: float = 2.0, human_delay: Tuple[float, float] = (1.0, 3.0)):
        if delay_between_requests < 0:
            raise ValueError("delay_between_requests must be non-negative")
        low, high = human_delay
        if low < 0 or high < low:
            raise ValueError(f"Invalid human delay range: {human_delay}")

        self.delay_between_requests = delay_between_requests
        self.human_delay = (low, high)

    async def wait_before_navigation(self, url: str):
        """Apply the fixed pacing delay before navigating to url"""
        if self.delay_between_requests > 0:
            logger.debug(f"Pacing {url}: waiting {self.delay_between_requests:.1f}s")
            await asyncio.sleep(self.delay_between_requests)

    def next_human_delay(self) -> float:
        """Draw a randomized pause length in seconds"""
        low, high = self.human_delay
        return low + random.random() * (high - low)
