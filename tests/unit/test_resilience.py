"""Unit tests for resilience utilities."""

import pytest
from unittest.mock import AsyncMock, patch

from structura.utils.resilience import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
    retry_with_backoff,
)


@pytest.mark.asyncio
async def test_retry_succeeds_after_failures():
    """Test transient failures are retried."""
    attempts = []

    @retry_with_backoff(max_retries=3, base_delay=0.5)
    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("transient")
        return "ok"

    with patch("structura.utils.resilience.asyncio.sleep", new=AsyncMock()) as sleep:
        assert await flaky() == "ok"

    assert len(attempts) == 3
    assert [call.args[0] for call in sleep.call_args_list] == [0.5, 1.0]


@pytest.mark.asyncio
async def test_retry_only_listed_exceptions():
    """Test exceptions outside the retry list propagate immediately."""
    attempts = []

    @retry_with_backoff(max_retries=3, exceptions=(ConnectionError,))
    async def broken():
        attempts.append(1)
        raise ValueError("permanent")

    with pytest.raises(ValueError):
        await broken()

    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_circuit_opens_after_threshold():
    """Test the circuit opens and rejects calls."""
    breaker = CircuitBreaker(failure_threshold=2, timeout=60)
    failing = AsyncMock(side_effect=ConnectionError("down"))

    for _ in range(2):
        with pytest.raises(ConnectionError):
            await breaker.call(failing)

    assert breaker.get_state() == CircuitState.OPEN
    with pytest.raises(CircuitBreakerOpenError):
        await breaker.call(failing)
    assert failing.call_count == 2


@pytest.mark.asyncio
async def test_circuit_recovers_through_half_open():
    """Test a successful trial call after the timeout closes the circuit."""
    breaker = CircuitBreaker(failure_threshold=1, timeout=0, half_open_max_calls=1)

    with pytest.raises(ConnectionError):
        await breaker.call(AsyncMock(side_effect=ConnectionError("down")))
    assert breaker.get_state() == CircuitState.OPEN

    with patch("structura.utils.resilience.time.time", return_value=breaker.last_failure_time + 1):
        assert await breaker.call(AsyncMock(return_value="ok")) == "ok"

    assert breaker.get_state() == CircuitState.CLOSED
