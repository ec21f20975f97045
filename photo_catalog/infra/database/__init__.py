"""Database infrastructure package.

Example:
    from photo_catalog.infra.database import get_async_session

    async with get_async_session() as session:
        result = await session.execute(...)
"""

from .session import (
    AsyncSessionLocal,
    async_sessionmaker,
    close_database,
    create_async_engine,
    create_schema,
    engine,
    get_async_session,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "async_sessionmaker",
    "close_database",
    "create_async_engine",
    "create_schema",
    "engine",
    "get_async_session",
    "init_database",
]
