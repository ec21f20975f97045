"""Lazy evaluation support for logging.

Debug logging in the query engine describes statements and result sets;
building those strings is only worth it when DEBUG is enabled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any


class LazyString:
    """Lazy-evaluated string that defers computation until needed.

    Example:
        logger.debug("Statement: %s", LazyString(lambda: str(stmt)))
    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[], Any]) -> None:
        self._func = func

    def __str__(self) -> str:
        return str(self._func())

    def __repr__(self) -> str:
        return f"LazyString({self._func!r})"


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and args only when enabled.

    Example:
        logger = LazyLoggerAdapter(logging.getLogger(__name__))
        logger.debug(lambda: f"Fetched {len(rows)} rows")
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Log message with lazy evaluation support.

        Args:
            level: Numeric log level (e.g., logging.DEBUG).
            msg: Log message or callable returning message.
            *args: Format arguments (may include callables).
            **kwargs: Additional kwargs for logging.
        """
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Merge bound context into ``extra``."""
        if self.extra:
            kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get logger with lazy evaluation support.

    Args:
        name: Logger name (usually __name__).
        **context: Optional context to bind to logger.

    Returns:
        Logger adapter with lazy evaluation support.
    """
    base_logger = logging.getLogger(name)
    return LazyLoggerAdapter(base_logger, context or {})


def lazy(func: Callable[[], Any]) -> LazyString:
    """Wrap a callable in a LazyString."""
    return LazyString(func)
