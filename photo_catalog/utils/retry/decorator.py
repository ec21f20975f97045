from __future__ import annotations

import asyncio
from functools import wraps
import logging
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from .exceptions import RetryError
from .strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    retry_if: Callable[[Exception], bool] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable with exponential backoff.

    Exceptions that the strategy does not consider retryable propagate
    unchanged. Once ``max_attempts`` is spent, ``RetryError`` is raised
    from the last failure.

    Example:
        @retry(max_attempts=5, exceptions=(OperationalError,))
        async def connect() -> None: ...
    """
    strategy = RetryStrategy(
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=exceptions,
        retry_if=retry_if,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not strategy.should_retry(e):
                        raise

                    attempt += 1
                    if attempt >= strategy.max_attempts:
                        logger.error(
                            "All retry attempts exhausted for %s",
                            func.__name__,
                            extra={"function": func.__name__, "attempts": attempt},
                        )
                        raise RetryError(e, attempt) from e

                    delay = strategy.calculate_delay(attempt - 1)
                    logger.warning(
                        "Retrying %s after %.2fs (attempt %d/%d)",
                        func.__name__,
                        delay,
                        attempt,
                        strategy.max_attempts,
                        extra={"function": func.__name__, "exception": str(e)},
                    )
                    await asyncio.sleep(delay)

        return async_wrapper

    return decorator
