"""Tests for the bounded retry combinator."""

import logging
from unittest.mock import AsyncMock

import pytest

from textshape.utils.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry


def failing_then_succeeding(failures: int, value: str = "ok") -> AsyncMock:
    """Mock operation that raises ``failures`` times before returning ``value``."""
    effects: list = [RuntimeError(f"failure {i + 1}") for i in range(failures)]
    effects.append(value)
    return AsyncMock(side_effect=effects)


class TestRetryConfig:
    """Test retry configuration."""

    def test_default_config(self) -> None:
        """Test default configuration allows 5 retries without waiting."""
        assert DEFAULT_RETRY_CONFIG.retries == 5
        assert DEFAULT_RETRY_CONFIG.max_attempts == 6
        assert DEFAULT_RETRY_CONFIG.wait_seconds == 0.0

    def test_negative_retries_rejected(self) -> None:
        """Test negative budget is invalid."""
        with pytest.raises(ValueError):
            RetryConfig(retries=-1)

    def test_negative_wait_rejected(self) -> None:
        """Test negative wait is invalid."""
        with pytest.raises(ValueError):
            RetryConfig(wait_seconds=-0.5)


class TestRetry:
    """Test retry()."""

    @pytest.mark.asyncio
    async def test_success_first_try(self) -> None:
        """Test a successful operation runs exactly once."""
        operation = failing_then_succeeding(0)

        assert await retry(5, operation) == "ok"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failures", [1, 2, 3, 4, 5])
    async def test_succeeds_after_k_failures(self, failures: int) -> None:
        """Test k failures then success returns the value after k+1 calls."""
        operation = failing_then_succeeding(failures)

        assert await retry(5, operation) == "ok"
        assert operation.await_count == failures + 1

    @pytest.mark.asyncio
    async def test_always_failing_runs_six_times(self) -> None:
        """Test budget of 5 gives 6 calls and propagates the sixth failure."""
        errors = [RuntimeError(f"failure {i + 1}") for i in range(6)]
        operation = AsyncMock(side_effect=errors)

        with pytest.raises(RuntimeError) as exc_info:
            await retry(5, operation)

        assert exc_info.value is errors[-1]
        assert operation.await_count == 6

    @pytest.mark.asyncio
    async def test_zero_budget_single_try(self) -> None:
        """Test zero budget means the first failure propagates."""
        operation = failing_then_succeeding(1)

        with pytest.raises(RuntimeError, match="failure 1"):
            await retry(0, operation)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_negative_budget_rejected(self) -> None:
        """Test negative budget raises before calling the operation."""
        operation = failing_then_succeeding(0)

        with pytest.raises(ValueError):
            await retry(-1, operation)
        operation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_attempts_are_sequential(self) -> None:
        """Test an attempt never starts while another is in flight."""
        in_flight = 0
        max_in_flight = 0
        calls = 0

        async def operation() -> int:
            nonlocal in_flight, max_in_flight, calls
            in_flight += 1
            max_in_flight = max(max_in_flight, in_flight)
            calls += 1
            try:
                if calls < 4:
                    raise RuntimeError("not yet")
                return calls
            finally:
                in_flight -= 1

        assert await retry(5, operation) == 4
        assert max_in_flight == 1

    @pytest.mark.asyncio
    async def test_non_retryable_errors_propagate_immediately(self) -> None:
        """Test errors outside retry_on are not retried."""
        operation = AsyncMock(side_effect=KeyError("boom"))
        config = RetryConfig(retry_on=(RuntimeError,))

        with pytest.raises(KeyError):
            await retry(5, operation, config)
        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_earlier_failures_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test intermediate failures are logged, not returned."""
        operation = failing_then_succeeding(2)

        with caplog.at_level(logging.WARNING, logger="textshape.utils.retry"):
            await retry(5, operation)

        messages = [r.getMessage() for r in caplog.records]
        assert any("failure 1" in m for m in messages)
        assert any("failure 2" in m for m in messages)
