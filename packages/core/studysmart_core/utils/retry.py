"""Retry helpers built on tenacity.

Used where a transient failure is expected and a second attempt is cheap,
such as connecting to the database at startup. Generation calls are not
retried here.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from studysmart_core.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds

RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
)


def _describe(error: BaseException | None) -> str:
    if error is None:
        return "unknown error"
    text = str(error).strip() or type(error).__name__
    cause = error.__cause__
    if cause is not None and str(cause).strip():
        text = f"{text} (caused by: {str(cause).strip()})"
    return text


def _log_before_sleep(operation_name: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def log(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        wait = state.next_action.sleep if state.next_action else 0
        logger.warning(
            f"{operation_name} failed (attempt {state.attempt_number}/{max_attempts}): "
            f"{_describe(error)}; retrying in {wait:.1f}s"
        )

    return log


def get_async_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    retry_on: tuple[type[BaseException], ...] = RETRYABLE_EXCEPTIONS,
    operation_name: str = "operation",
) -> AsyncRetrying:
    """Create an async retry controller with exponential backoff.

    The last error is re-raised once attempts are exhausted.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_before_sleep(operation_name, max_attempts),
        reraise=True,
    )


async def with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    operation_name: str = "operation",
    retry_on: tuple[type[BaseException], ...] = RETRYABLE_EXCEPTIONS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)``, retrying on ``retry_on`` errors.

    Errors of any other type propagate after the first attempt.

    Args:
        func: Async callable
        max_attempts: Total attempts, including the first
        operation_name: Name used in log messages
        retry_on: Exception types that trigger another attempt
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds
    """
    retrying = get_async_retry(
        max_attempts=max_attempts,
        min_wait=min_wait,
        max_wait=max_wait,
        retry_on=retry_on,
        operation_name=operation_name,
    )
    async for attempt in retrying:
        with attempt:
            return await func(*args, **kwargs)

    raise RuntimeError(f"{operation_name} did not run")  # pragma: no cover
