"""Timing helpers used to log how long pipeline stages take."""

import inspect
import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import ParamSpec, TypeVar

from pagemd.logger import logger

__all__ = ["timeit", "timer"]

P = ParamSpec("P")
R = TypeVar("R")


@contextmanager
def timer(name: str = "Operation", log_level: int = logging.DEBUG) -> Iterator[None]:
    """Log the wall time of the wrapped block.

    Example:
        >>> with timer("Content detection"):
        ...     detected = detector.detect(html)

    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        elapsed_time = time.perf_counter() - start_time
        logger.log(log_level, "%s took %.4f seconds", name, elapsed_time)


def timeit(
    name: str | None = None, log_level: int = logging.DEBUG
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Time function execution (supports both sync and async).

    Args:
        name: Custom name for the operation (default: module-qualified function name)
        log_level: Logging level to use (default: DEBUG)

    Example:
        >>> @timeit("convert_page tool")
        ... async def convert_page(html: str) -> dict:
        ...     ...

    """
    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        operation_name = name or f"{func.__module__}.{func.__name__}"

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                with timer(operation_name, log_level):
                    return await func(*args, **kwargs)  # type: ignore[no-any-return]
            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with timer(operation_name, log_level):
                return func(*args, **kwargs)
        return sync_wrapper
    return decorator
