"""Minimal generic repository for SQLAlchemy models.

Provides basic lookups with explicit session passing plus the
``storage_errors`` guard that turns driver failures into ``StorageError``.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    class SecretKeyRepository(BaseRepository[SecretKey]):
        async def is_valid(self, session: AsyncSession, key: str) -> bool:
            return await self.get(session, key) is not None
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from photo_catalog.core.database.exceptions import StorageError
from photo_catalog.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Minimal generic repository.

    Provides:
        - get(session, id) -> T | None
        - storage_errors(operation) -> async context manager
        - transaction(session, operation) -> async context manager

    Session is always explicit - no hidden state.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Photo, SecretKey)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    @asynccontextmanager
    async def storage_errors(self, operation: str) -> AsyncIterator[None]:
        """Re-raise SQLAlchemy failures as StorageError.

        Domain errors raised inside the block pass through untouched.

        Args:
            operation: Name reported in the error and log record
        """
        try:
            yield
        except SQLAlchemyError as exc:
            self._logger.error(
                "Storage operation failed",
                extra={
                    "entity": self.model.__name__,
                    "operation": operation,
                    "error": str(exc),
                },
            )
            raise StorageError(operation, exc) from exc

    @asynccontextmanager
    async def transaction(self, session: AsyncSession, operation: str) -> AsyncIterator[None]:
        """Run the block as one all-or-nothing unit of work.

        Commits once when the block exits normally and rolls back on any
        exception, which then propagates (driver errors as StorageError).
        Unlike ``session.begin()`` this also accepts a session whose
        transaction was already started by an earlier read.

        Example:
            async with repo.transaction(session, "photos.update"):
                await session.execute(update(Photo).values(title="Dusk"))
        """
        async with self.storage_errors(operation):
            try:
                yield
                await session.commit()
            except BaseException:
                await session.rollback()
                raise

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        async with self.storage_errors("db.get"):
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id!r}) -> {'found' if instance else 'not found'}"
        )
        return instance


__all__ = ["BaseRepository"]
