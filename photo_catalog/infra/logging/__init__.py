"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.info("Page requested", extra={"anchor": repr(anchor)})

    # Lazy evaluation for expensive operations
    from photo_catalog.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Statement: {stmt}")  # Only runs if DEBUG enabled
"""

from photo_catalog.infra.logging.config import configure_logging, setup_logging
from photo_catalog.infra.logging.formatters import JSONFormatter
from photo_catalog.infra.logging.lazy import (
    LazyLoggerAdapter,
    LazyString,
    get_lazy_logger,
    lazy,
)

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "configure_logging",
    "get_lazy_logger",
    "lazy",
    "setup_logging",
]
