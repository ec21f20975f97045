"""Database repository exceptions.

Custom exceptions for repository operations that provide better
error messages and typing than raw SQLAlchemy exceptions.
"""
from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations.

    Raised when a repository operation fails due to programming
    errors, configuration issues, or unexpected states.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class StorageError(RepositoryError):
    """The underlying store failed.

    Wraps connectivity problems, unexpected constraint violations and
    statement errors. The original SQLAlchemy exception is kept as
    ``__cause__``. Callers may retry the whole operation; the repository
    never retries on its own.

    Attributes:
        operation: Repository operation that failed (e.g. "photos.insert")
    """

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        super().__init__(
            f"Storage failure during {operation}",
            details={"operation": operation, "error": type(cause).__name__},
        )


class InvalidCursorError(RepositoryError, ValueError):
    """A pagination offset or anchor id falls outside the 32-bit id range."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(message, details={"offset": offset})


__all__ = [
    "InvalidCursorError",
    "RepositoryError",
    "StorageError",
]
