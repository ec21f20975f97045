"""Repository for secret keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

from photo_catalog.core.database.repository import BaseRepository
from photo_catalog.features.secret_keys.models import SecretKey

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class SecretKeyRepository(BaseRepository[SecretKey]):
    """Repository for SecretKey model.

    Inherits from BaseRepository:
        - get(session, id) -> SecretKey | None
        - transaction(session, operation) -> async context manager
    """

    def __init__(self) -> None:
        super().__init__(SecretKey)

    async def is_valid(self, session: AsyncSession, key: str) -> bool:
        """Check whether ``key`` is a known secret key."""
        if not key:
            return False
        return await self.get(session, key) is not None

    async def add(self, session: AsyncSession, key: str) -> bool:
        """Register a key. Returns False if it already existed."""
        if await self.is_valid(session, key):
            return False
        async with self.transaction(session, "secret_keys.add"):
            session.add(SecretKey(secret_key=key))
        self._logger.info("Secret key added")
        return True

    async def remove(self, session: AsyncSession, key: str) -> bool:
        """Revoke a key. Returns False if it was unknown."""
        async with self.transaction(session, "secret_keys.remove"):
            instance = await self.get(session, key)
            if instance is None:
                return False
            await session.delete(instance)
        self._logger.info("Secret key removed")
        return True


_secret_key_repository: SecretKeyRepository | None = None


def get_secret_key_repository() -> SecretKeyRepository:
    """Get the process-wide secret key repository."""
    global _secret_key_repository
    if _secret_key_repository is None:
        _secret_key_repository = SecretKeyRepository()
    return _secret_key_repository
