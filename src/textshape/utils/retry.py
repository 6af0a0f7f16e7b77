"""Bounded retry combinator for async operations.

Attempts run strictly one after another; a failed attempt is retried until
the budget is spent, and then the failure of the final attempt propagates.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
    wait_none,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        retries: int = 5,
        wait_seconds: float = 0.0,
        retry_on: tuple[type[BaseException], ...] = (Exception,),
    ):
        """Initialize retry configuration.

        Args:
            retries: Extra attempts after the first one (0 means a single try)
            wait_seconds: Fixed pause between attempts (0 disables waiting)
            retry_on: Exception types that consume budget instead of propagating
        """
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")
        if wait_seconds < 0:
            raise ValueError(f"wait_seconds must be >= 0, got {wait_seconds}")

        self.retries = retries
        self.wait_seconds = wait_seconds
        self.retry_on = retry_on

    @property
    def max_attempts(self) -> int:
        return self.retries + 1


# Default retry configuration: 5 retries, 6 tries in total, no delay
DEFAULT_RETRY_CONFIG = RetryConfig(retries=5)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log a failed attempt before the next one starts.

    Args:
        retry_state: Tenacity retry state
    """
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        logger.warning(
            f"Retrying due to error (attempt {retry_state.attempt_number}): "
            f"{type(exception).__name__}: {exception}"
        )


async def retry(
    retries: int,
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the retry budget is spent.

    Usage:
        result = await retry(5, lambda: client.complete(messages))

    Args:
        retries: Extra attempts allowed after the first one
        operation: Zero-argument callable returning an awaitable
        config: Optional settings for waiting and which errors are retried
            (its own ``retries`` value is ignored in favour of ``retries``)

    Returns:
        Value of the first successful attempt

    Raises:
        ValueError: If ``retries`` is negative
        Exception: Whatever the final attempt raised
    """
    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")

    config = config or DEFAULT_RETRY_CONFIG

    retrying = AsyncRetrying(
        stop=stop_after_attempt(retries + 1),
        wait=wait_fixed(config.wait_seconds) if config.wait_seconds else wait_none(),
        retry=retry_if_exception_type(config.retry_on),
        before_sleep=log_retry_attempt,
        reraise=True,
    )

    try:
        return await retrying(operation)
    except Exception as e:
        attempts = retrying.statistics.get("attempt_number", retries + 1)
        logger.error(f"Operation failed after {attempts} attempts: {type(e).__name__}: {e}")
        raise
