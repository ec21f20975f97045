"""Core database package: declarative base, column types, repository and errors.

Example:
    from photo_catalog.core.database import Base, BaseRepository, StorageError
"""

from photo_catalog.core.database.base import NAMING_CONVENTION, Base, IntegerPKMixin
from photo_catalog.core.database.exceptions import (
    InvalidCursorError,
    RepositoryError,
    StorageError,
)
from photo_catalog.core.database.repository import BaseRepository
from photo_catalog.core.database.types import StringArray

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "IntegerPKMixin",
    "InvalidCursorError",
    "RepositoryError",
    "StorageError",
    "StringArray",
]
