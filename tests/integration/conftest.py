"""Shared fixtures for integration tests.

The application is built with ``create_app()`` and its database session
dependency is overridden to use the in-memory test database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from photo_catalog.core.dependencies.database import get_db_session

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """FastAPI application wired to the test database."""
    from photo_catalog.app.main import create_app

    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application (lifespan not started)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(secret_key: str) -> dict[str, str]:
    """Authorization header carrying a valid secret key."""
    return {"Authorization": f"Bearer {secret_key}"}
