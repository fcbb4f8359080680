"""Logging setup shared by the core package and the API."""

import asyncio
import logging
import os
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

from studysmart_core.errors import StudySmartError

LOG_LEVEL_ENV = "STUDYSMART_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

F = TypeVar("F", bound=Callable[..., Any])


def _default_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Return a module logger with a stdout handler attached once.

    The level comes from ``STUDYSMART_LOG_LEVEL`` unless given explicitly.
    """
    logger = logging.getLogger(name)

    if not any(getattr(h, "_studysmart", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._studysmart = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(_default_level())

    return logger


def _report(logger: logging.Logger, func_name: str, error: Exception) -> None:
    # Domain errors are expected outcomes; only unexpected ones get a traceback
    if isinstance(error, StudySmartError):
        logger.warning(f"{func_name} failed: {error.message}")
    else:
        logger.exception(f"Unexpected error in {func_name}: {error}")


def log_exceptions(logger: logging.Logger) -> Callable[[F], F]:
    """Decorator that logs errors raised by a sync or async callable, then re-raises."""

    def decorator(func: F) -> F:
        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _report(logger, func.__name__, e)
                    raise

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _report(logger, func.__name__, e)
                raise

        return sync_wrapper  # type: ignore[return-value]

    return decorator
