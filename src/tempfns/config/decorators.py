"""Logging and timing decorators.

Provides ``log_call`` and ``timed`` for the public temp-dir operations.
"""

import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def log_call(
    logger_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log function calls with structured data.

    User-facing errors (bad fixture or symlink requests) are logged at WARNING;
    everything else that escapes the call is logged at ERROR.

    Args:
        logger_name: Optional logger name (defaults to function module)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        log = logging.getLogger(logger_name or func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            log.debug(
                "Calling %s",
                func.__name__,
                extra={
                    "function": func.__name__,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                from tempfns.core.errors.base import ErrorKind, classify_error

                kind = classify_error(e)
                level = logging.WARNING if kind is ErrorKind.USER else logging.ERROR
                log.log(
                    level,
                    "Error in %s: %s",
                    func.__name__,
                    e,
                    extra={
                        "function": func.__name__,
                        "error": str(e),
                        "error_type": type(e).__name__,
                        "error_kind": kind.value if kind else None,
                    },
                )
                raise
            log.debug(
                "Completed %s",
                func.__name__,
                extra={"function": func.__name__, "success": True},
            )
            return result

        return wrapper

    return decorator


def timed(
    metric_name: Optional[str] = None,
    logger_name: Optional[str] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log the wall-clock duration of a call at DEBUG.

    Args:
        metric_name: Name reported in the log record (defaults to function name)
        logger_name: Optional logger name (defaults to function module)
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        name = metric_name or func.__name__
        log = logging.getLogger(logger_name or func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start) * 1000
                log.debug(
                    "%s took %.2fms",
                    name,
                    duration_ms,
                    extra={"metric": name, "duration_ms": duration_ms},
                )

        return wrapper

    return decorator
