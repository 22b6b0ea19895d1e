from collections.abc import Awaitable, Callable
from functools import wraps
from time import perf_counter
from typing import ParamSpec, TypeVar

from quill.monitoring import get_logger

# Type variables for generic decorator
P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger("quill.timing")


def timed(
    endpoint: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Time async handlers and log how long each call took.

    The duration is logged whether the call returns or raises.

    Args:
        endpoint: Label for the log entry (defaults to function name).

    Returns:
        Decorated function with timing instrumentation.

    Example:
        @timed("/posts")
        async def list_posts() -> PostPage:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        ep = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.debug(
                    "Handler timing",
                    endpoint=ep,
                    duration_ms=round((perf_counter() - start) * 1000, 2),
                )

        return wrapper

    return decorator
