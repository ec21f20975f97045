"""CLI utilities for running async operations and formatting output."""

from photo_catalog.cli.utils.async_runner import coro
from photo_catalog.cli.utils.formatters import error, info, success, warning

__all__ = ["coro", "error", "info", "success", "warning"]
