"""Database dependencies for FastAPI route handlers.

Two session getters exist:

1. ``get_db_session()`` (this module): FastAPI dependency, one session per
   request, closed when the request completes.
2. ``get_async_session()`` (infra.database): framework-agnostic context
   manager for the CLI and scripts.

Both use the same session factory.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from photo_catalog.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.

    Example:
        @router.get("/gallery")
        async def gallery(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_async_session() as session:
        yield session


DbSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
