"""Application lifespan management.

Startup: logging, then a database connectivity check (with retry).
Shutdown: dispose of the connection pool.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from photo_catalog.core.settings import get_app_settings, get_db_settings
from photo_catalog.infra.database import close_database, init_database
from photo_catalog.infra.logging import setup_logging
from photo_catalog.utils.retry import RetryError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application services."""
    setup_logging()
    app_settings = get_app_settings()
    db_settings = get_db_settings()

    logger.info(
        "Starting application",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    try:
        await init_database()
    except RetryError:
        if db_settings.startup_require_db:
            logger.exception("Database unavailable at startup; aborting")
            raise
        logger.warning("Database unavailable at startup; requests will fail until it returns")

    try:
        yield
    finally:
        await close_database()
        logger.info("Application shutdown complete")
