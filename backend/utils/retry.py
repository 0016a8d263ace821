import asyncio
import logging
from typing import Callable, Optional, TypeVar, Any
from functools import wraps

from config import LLM_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar('T')

class RetryConfig:
    MAX_ATTEMPTS = LLM_CONFIG.MAX_ATTEMPTS
    BASE_DELAY = LLM_CONFIG.RETRY_BASE_DELAY
    MAX_DELAY = LLM_CONFIG.RETRY_MAX_DELAY
    EXPONENTIAL_BASE = 2

def async_retry(
    max_attempts: int = RetryConfig.MAX_ATTEMPTS,
    base_delay: float = RetryConfig.BASE_DELAY,
    max_delay: float = RetryConfig.MAX_DELAY,
    exponential_base: float = RetryConfig.EXPONENTIAL_BASE,
    exceptions: tuple = (Exception,),
    should_retry: Optional[Callable[[BaseException], bool]] = None
):
    """Retry an async callable on ``exceptions`` with exponential backoff.

    ``should_retry`` lets the caller veto a retry for a caught exception,
    e.g. a non-recoverable backend error; vetoed exceptions propagate at once.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            last_exception = None

            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if should_retry is not None and not should_retry(e):
                        raise

                    if attempt == max_attempts - 1:
                        logger.error(
                            f"Function {func.__name__} failed after {max_attempts} attempts: {e}"
                        )
                        raise

                    delay = min(base_delay * (exponential_base ** attempt), max_delay)
                    logger.warning(
                        f"Function {func.__name__} failed (attempt {attempt + 1}/{max_attempts}), "
                        f"retrying in {delay:.2f}s: {e}"
                    )
                    await asyncio.sleep(delay)

            raise last_exception

        return wrapper
    return decorator
