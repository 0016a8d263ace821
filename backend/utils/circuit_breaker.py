import asyncio
import time
from enum import Enum
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from config import logger
from exceptions import CircuitBreakerOpenException


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


TripPredicate = Callable[[BaseException], bool]


def _always(exc: BaseException) -> bool:
    return True


class CircuitBreaker:
    """
    Fails fast once a dependency keeps failing.

    Only exceptions accepted by ``should_trip`` count as failures; anything
    else (bad credentials, rejected requests) passes through and leaves the
    breaker untouched, so fixing the caller takes effect on the next call.
    After ``recovery_timeout`` one trial call is let through; its outcome
    closes or reopens the circuit.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        should_trip: Optional[TripPredicate] = None,
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.should_trip = should_trip or _always

        self._failures = 0
        self._opened_at: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failures

    def reset(self) -> None:
        self._failures = 0
        self._opened_at = None
        self._state = CircuitState.CLOSED

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        async with self._lock:
            self._admit()

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            if self.should_trip(e):
                async with self._lock:
                    self._record_failure(e)
            raise

        async with self._lock:
            self._record_success()
        return result

    def _admit(self) -> None:
        if self._state is not CircuitState.OPEN:
            return
        elapsed = time.monotonic() - (self._opened_at or 0.0)
        if elapsed < self.recovery_timeout:
            logger.warning(
                "Circuit %s open, rejecting call (%.1fs until retry)",
                self.name, self.recovery_timeout - elapsed,
                extra={"circuit_breaker": self.name, "failure_count": self._failures}
            )
            raise CircuitBreakerOpenException(self.name, self._failures)
        logger.info("Circuit %s half-open, allowing a trial call", self.name)
        self._state = CircuitState.HALF_OPEN

    def _record_failure(self, exc: BaseException) -> None:
        self._failures += 1
        if self._state is CircuitState.HALF_OPEN or self._failures >= self.failure_threshold:
            self._state = CircuitState.OPEN
            self._opened_at = time.monotonic()
            logger.error(
                "Circuit %s opened after %d failures; last: %s",
                self.name, self._failures, exc,
                extra={"circuit_breaker": self.name, "threshold": self.failure_threshold}
            )

    def _record_success(self) -> None:
        if self._state is CircuitState.HALF_OPEN:
            logger.info("Circuit %s closed after successful trial call", self.name)
        self._failures = 0
        self._state = CircuitState.CLOSED


def circuit_breaker(
    name: str,
    failure_threshold: int = 5,
    recovery_timeout: float = 60.0,
    should_trip: Optional[TripPredicate] = None,
):
    breaker = CircuitBreaker(
        name,
        failure_threshold=failure_threshold,
        recovery_timeout=recovery_timeout,
        should_trip=should_trip,
    )

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await breaker.call(func, *args, **kwargs)
        wrapper._circuit_breaker = breaker
        return wrapper
    return decorator
