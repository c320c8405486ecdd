import asyncio
import random
import time
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Callable, Any
from collections import defaultdict
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Classification of request failures"""
    NAVIGATION_TIMEOUT = "navigation_timeout"
    HANDLER_TIMEOUT = "handler_timeout"
    NAVIGATION_ERROR = "navigation_error"
    BLOCKED = "blocked"  # 403 / 429
    HTTP_CLIENT_ERROR = "http_client_error"  # other 4xx
    HTTP_SERVER_ERROR = "http_server_error"  # 5xx
    UNKNOWN_ERROR = "unknown_error"


class HttpStatusError(Exception):
    """Navigation finished with an error status code"""

    def __init__(self, url: str, status: int):
        super().__init__(f"HTTP {status} for {url}")
        self.url = url
        self.status = status


class RequestFailedError(Exception):
    """A request exhausted its attempts or hit a non-retryable error"""

    def __init__(self, url: str, attempts: int, error_messages: List[str]):
        super().__init__(f"Request failed after {attempts} attempt(s): {url}")
        self.url = url
        self.attempts = attempts
        self.error_messages = error_messages


@dataclass
class RetryConfig:
    """Configuration for retry behavior"""
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0
    jitter: bool = True
    retryable_errors: List[ErrorType] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            self.max_attempts = 1
        if self.retryable_errors is None:
            self.retryable_errors = [
                ErrorType.NAVIGATION_TIMEOUT,
                ErrorType.HANDLER_TIMEOUT,
                ErrorType.NAVIGATION_ERROR,
                ErrorType.BLOCKED,
                ErrorType.HTTP_SERVER_ERROR,
                ErrorType.UNKNOWN_ERROR
            ]


@dataclass
class ErrorInfo:
    """Information about an error occurrence"""
    url: str
    error_type: ErrorType
    status_code: Optional[int]
    message: str
    timestamp: float
    attempt: int
    response_time: Optional[float] = None


class ErrorHandler:
    """Retry policy for page requests"""

    def __init__(self, retry_config: RetryConfig = None):
        self.retry_config = retry_config or RetryConfig()
        self.error_history: List[ErrorInfo] = []
        self.failed_urls: Dict[str, List[ErrorInfo]] = defaultdict(list)

    def classify_error(self, error: Exception) -> ErrorType:
        """Classify an error into appropriate error type"""
        if isinstance(error, HttpStatusError):
            if error.status in (403, 429):
                return ErrorType.BLOCKED
            elif 400 <= error.status < 500:
                return ErrorType.HTTP_CLIENT_ERROR
            elif 500 <= error.status < 600:
                return ErrorType.HTTP_SERVER_ERROR
        elif isinstance(error, PlaywrightTimeoutError):
            return ErrorType.NAVIGATION_TIMEOUT
        elif isinstance(error, PlaywrightError):
            return ErrorType.NAVIGATION_ERROR
        elif isinstance(error, asyncio.TimeoutError):
            return ErrorType.HANDLER_TIMEOUT

        return ErrorType.UNKNOWN_ERROR

    def is_retryable(self, error_type: ErrorType, attempt: int) -> bool:
        """Determine if an error should be retried"""
        if attempt >= self.retry_config.max_attempts:
            return False

        return error_type in self.retry_config.retryable_errors

    def calculate_delay(self, attempt: int, error_type: ErrorType) -> float:
        """Calculate delay before retry using exponential backoff with jitter"""
        delay = self.retry_config.base_delay * (
            self.retry_config.exponential_base ** (attempt - 1)
        )

        # Blocked responses back off harder
        if error_type == ErrorType.BLOCKED:
            delay *= 2

        delay = min(delay, self.retry_config.max_delay)

        if self.retry_config.jitter:
            jitter = delay * 0.1 * random.random()
            delay += jitter

        return delay

    async def execute_with_retry(self, func: Callable, url: str, *args, **kwargs) -> Any:
        """
        Execute a coroutine function with retries

        Raises:
            RequestFailedError: when attempts run out or the error is not retryable
        """
        messages: List[str] = []

        for attempt in range(1, self.retry_config.max_attempts + 1):
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)

                # Success - forget earlier failures for this URL
                if url in self.failed_urls:
                    del self.failed_urls[url]

                return result

            except asyncio.CancelledError:
                raise
            except Exception as error:
                error_type = self.classify_error(error)
                message = str(error) or error.__class__.__name__
                messages.append(message)

                error_info = ErrorInfo(
                    url=url,
                    error_type=error_type,
                    status_code=getattr(error, 'status', None),
                    message=message,
                    timestamp=time.time(),
                    attempt=attempt,
                    response_time=time.time() - start_time
                )
                self.error_history.append(error_info)
                self.failed_urls[url].append(error_info)

                logger.warning(
                    f"Attempt {attempt}/{self.retry_config.max_attempts} failed for {url}: "
                    f"{error_type.value} - {message}"
                )

                if not self.is_retryable(error_type, attempt):
                    raise RequestFailedError(url, attempt, messages) from error

                delay = self.calculate_delay(attempt, error_type)
                logger.info(f"Retrying {url} in {delay:.1f}s (attempt {attempt + 1})")
                await asyncio.sleep(delay)

        # max_attempts is always >= 1, so the loop returns or raises
        raise RequestFailedError(url, self.retry_config.max_attempts, messages)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors encountered"""
        if not self.error_history:
            return {"total_errors": 0, "failed_urls": 0, "error_types": {}}

        error_counts = defaultdict(int)
        for error in self.error_history:
            error_counts[error.error_type.value] += 1

        return {
            "total_errors": len(self.error_history),
            "failed_urls": len(self.failed_urls),
            "error_types": dict(error_counts)
        }
