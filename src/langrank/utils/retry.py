# ABOUTME: Navigation retry policy built on tenacity's AsyncRetrying
# ABOUTME: Retries transient navigation failures with exponential backoff; readiness failures are final

from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, stop_before_delay, wait_exponential

from langrank.extraction.base import NavigationFailure
from langrank.utils.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def _log_retry(retry_state) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying navigation",
        attempt=retry_state.attempt_number,
        source_id=getattr(error, "source_id", None),
        error=str(error),
    )


async def with_navigation_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 2,
    min_wait: float = 1.0,
    max_wait: float = 8.0,
    multiplier: float = 2.0,
    max_delay: float | None = None,
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` navigation failures occur.

    Only NavigationFailure is retried; the last failure is re-raised unchanged.
    With ``max_delay`` set, no further attempt is started once the elapsed time
    plus the next backoff would reach it.
    """
    stop = stop_after_attempt(max_attempts)
    if max_delay is not None:
        stop = stop | stop_before_delay(max_delay)

    retrying = AsyncRetrying(
        stop=stop,
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(NavigationFailure),
        before_sleep=_log_retry,
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await operation()
    raise AssertionError("unreachable: tenacity either returns or reraises")  # pragma: no cover
