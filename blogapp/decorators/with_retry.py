"""Exponential backoff for transient failures in async calls."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import ParamSpec, TypeVar

from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from blogapp.configs import file_logger

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")

TRANSIENT_ERRORS = (ConnectionError, TimeoutError)


def _warn_before_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    name = getattr(retry_state.fn, "__qualname__", "call")
    logger.warning(
        f"{name} failed on attempt {retry_state.attempt_number} ({error!r}), retrying in {delay:.2f}s",
    )


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: type[Exception] | tuple[type[Exception], ...] = TRANSIENT_ERRORS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async function on the given exceptions.

    Waits grow exponentially from ``base_delay`` up to ``max_delay``. After
    ``max_retries`` attempts the last exception propagates unchanged.

    Args:
        max_retries: Total number of attempts, including the first.
        base_delay: First wait in seconds.
        max_delay: Upper bound for any wait in seconds.
        exec_retry: Exception type or types that trigger another attempt.
    """
    return retry(
        retry=retry_if_exception_type(exec_retry),
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        before_sleep=_warn_before_retry,
        reraise=True,
    )
