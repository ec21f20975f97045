"""Database session management with psycopg3 async driver."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker as _async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine as _create_async_engine

from photo_catalog.core.settings import get_db_settings
from photo_catalog.utils.retry import retry

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

LOCAL_FALLBACK_URL = "sqlite+aiosqlite:///./photo_catalog.db"

db_settings = get_db_settings()

if db_settings.is_configured:
    _database_url = db_settings.url
    _engine_kwargs = db_settings.sqlalchemy_engine_kwargs()
else:
    _database_url = LOCAL_FALLBACK_URL
    _engine_kwargs = {"echo": db_settings.echo}

# Bounded pool: once pool_size + max_overflow connections are checked out,
# acquisition waits at most pool_timeout seconds and then raises.
engine = _create_async_engine(_database_url, **_engine_kwargs)

AsyncSessionLocal = _async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def _redacted_url() -> str:
    return make_url(_database_url).render_as_string(hide_password=True)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            page = await repository.get_photo_page(session, 10, Latest(), spec)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@retry(
    max_attempts=db_settings.startup_retry_attempts,
    initial_delay=db_settings.startup_retry_delay,
    max_delay=30.0,
)
async def init_database() -> None:
    """Check database connectivity with retry logic.

    Useful during application startup when the database might not be
    immediately available (e.g., in containerized environments).

    Raises:
        RetryError: If unable to connect after all retry attempts.
    """
    logger.info(
        "Initializing database connection",
        extra={
            "url": _redacted_url(),
            "max_attempts": db_settings.startup_retry_attempts,
        },
    )
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database connection established", extra={"url": _redacted_url()})


async def create_schema() -> None:
    """Create all catalog tables that do not exist yet.

    Intended for local SQLite databases; PostgreSQL deployments use Alembic.
    """
    from photo_catalog.core.database import Base
    from photo_catalog.features.photos import models as _photo_models  # noqa: F401
    from photo_catalog.features.secret_keys import models as _key_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created", extra={"url": _redacted_url()})


async def close_database() -> None:
    """Dispose of the engine and its pooled connections.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")
    await engine.dispose()
    logger.info("Database connection closed successfully")


# Re-export for convenience
create_async_engine = _create_async_engine
async_sessionmaker = _async_sessionmaker
