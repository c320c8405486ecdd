"""
Utility modules for crawling
"""

from .rate_limiter import RateLimiter

__all__ = [
    'RateLimiter'
]
