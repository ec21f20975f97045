"""Pytest configuration and shared fixtures.

Organization:
    - Environment: keep tests away from a real PostgreSQL server
    - Database Fixtures: in-memory SQLite engine and session with the catalog schema
    - Data Fixtures: photo payload factory and a stored secret key
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable, Generator
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from photo_catalog.features.photos.schemas import PhotoPayload

# Ensure tests run without external infrastructure
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_STARTUP_REQUIRE_DB", "false")
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    aiosqlite keeps a single connection for ``:memory:`` URLs, so every
    session created from this engine sees the same database.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def session_factory(db_engine: AsyncEngine) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Create the catalog tables and return a session factory bound to them.

    Tables are dropped again after the test.
    """
    from photo_catalog.core.database import Base
    from photo_catalog.features.photos import models as _photo_models  # noqa: F401
    from photo_catalog.features.secret_keys import models as _key_models  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Async database session over a freshly created catalog schema.

    Example:
        async def test_lookup(db_session):
            repo = SqlCatalogRepository()
            assert await repo.get_photo_by_id(db_session, 1, Visibility.ALL) is None
    """
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def write_statements(db_engine: AsyncEngine) -> Generator[list[str]]:
    """Record every INSERT, UPDATE and DELETE sent to the database.

    Example:
        async def test_noop(db_session, write_statements):
            write_statements.clear()
            ...
            assert write_statements == []
    """
    recorded: list[str] = []

    def _record(conn: Any, cursor: Any, statement: str, *args: Any) -> None:
        verb = statement.lstrip().split(" ", 1)[0].upper()
        if verb in {"INSERT", "UPDATE", "DELETE"}:
            recorded.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", _record)
    yield recorded
    event.remove(db_engine.sync_engine, "before_cursor_execute", _record)


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_payload() -> Callable[..., PhotoPayload]:
    """Factory for photo payloads with two sources by default.

    Example:
        payload = make_payload("sunset", tags=["beach"])
    """
    from photo_catalog.features.photos.schemas import PhotoPayload, SourceSchema

    def _make(file_stem: str, **overrides: Any) -> PhotoPayload:
        data: dict[str, Any] = {
            "file_stem": file_stem,
            "title": f"Photo {file_stem}",
            "taken_timestamp": "2024-06-01T18:30:00",
            "tags": [],
            "sources": [
                SourceSchema(width=800, height=600, url=f"https://img.example/{file_stem}-800.jpg"),
                SourceSchema(width=400, height=300, url=f"https://img.example/{file_stem}-400.jpg"),
            ],
        }
        data.update(overrides)
        return PhotoPayload(**data)

    return _make


@pytest.fixture
async def secret_key(db_session: AsyncSession) -> str:
    """A secret key stored in the test database."""
    from photo_catalog.features.secret_keys import SecretKeyRepository

    key = "test-secret-key"
    await SecretKeyRepository().add(db_session, key)
    return key
