import pytest
from unittest.mock import AsyncMock, patch

from exceptions import CircuitBreakerOpenException, LLMException
from utils.circuit_breaker import CircuitBreaker, CircuitState
from utils.retry import async_retry


@pytest.mark.asyncio
class TestAsyncRetry:

    async def test_retries_until_success(self):
        func = AsyncMock(side_effect=[LLMException("flaky"), "ok"])
        wrapped = async_retry(max_attempts=3, exceptions=(LLMException,))(func)

        with patch("utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
            assert await wrapped() == "ok"

        assert func.await_count == 2
        sleep.assert_awaited_once_with(1.0)

    async def test_should_retry_veto(self):
        func = AsyncMock(side_effect=LLMException("fatal", recoverable=False))
        wrapped = async_retry(
            max_attempts=3,
            exceptions=(LLMException,),
            should_retry=lambda e: e.recoverable,
        )(func)

        with pytest.raises(LLMException):
            await wrapped()
        assert func.await_count == 1

    async def test_unlisted_exception_propagates(self):
        func = AsyncMock(side_effect=KeyError("x"))
        wrapped = async_retry(max_attempts=3, exceptions=(LLMException,))(func)

        with pytest.raises(KeyError):
            await wrapped()
        assert func.await_count == 1


def _recoverable(exc):
    return isinstance(exc, LLMException) and exc.recoverable


@pytest.mark.asyncio
class TestCircuitBreaker:

    async def test_opens_at_threshold(self):
        breaker = CircuitBreaker("t", failure_threshold=2, recovery_timeout=60.0, should_trip=_recoverable)
        failing = AsyncMock(side_effect=LLMException("down"))

        for _ in range(2):
            with pytest.raises(LLMException):
                await breaker.call(failing)

        assert breaker.state is CircuitState.OPEN
        with pytest.raises(CircuitBreakerOpenException):
            await breaker.call(failing)
        assert failing.await_count == 2

    async def test_non_tripping_failures_are_ignored(self):
        breaker = CircuitBreaker("t", failure_threshold=1, should_trip=_recoverable)

        for exc in (LLMException("bad key", recoverable=False), ValueError("bug")):
            with pytest.raises(type(exc)):
                await breaker.call(AsyncMock(side_effect=exc))

        assert breaker.state is CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_recovery(self):
        breaker = CircuitBreaker("t", failure_threshold=1, recovery_timeout=0.0, should_trip=_recoverable)
        with pytest.raises(LLMException):
            await breaker.call(AsyncMock(side_effect=LLMException("down")))
        assert breaker.state is CircuitState.OPEN

        assert await breaker.call(AsyncMock(return_value="ok")) == "ok"
        assert breaker.state is CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_failed_trial_reopens(self):
        breaker = CircuitBreaker("t", failure_threshold=3, recovery_timeout=0.0, should_trip=_recoverable)
        for _ in range(3):
            with pytest.raises(LLMException):
                await breaker.call(AsyncMock(side_effect=LLMException("down")))

        with pytest.raises(LLMException):
            await breaker.call(AsyncMock(side_effect=LLMException("still down")))

        assert breaker.state is CircuitState.OPEN

    async def test_default_trips_on_any_exception(self):
        breaker = CircuitBreaker("t", failure_threshold=1)
        with pytest.raises(ValueError):
            await breaker.call(AsyncMock(side_effect=ValueError("bug")))
        assert breaker.state is CircuitState.OPEN

    async def test_reset(self):
        breaker = CircuitBreaker("t", failure_threshold=1, should_trip=_recoverable)
        with pytest.raises(LLMException):
            await breaker.call(AsyncMock(side_effect=LLMException("down")))

        breaker.reset()

        assert breaker.state is CircuitState.CLOSED
        assert breaker.failure_count == 0
