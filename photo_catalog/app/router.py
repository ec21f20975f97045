"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from photo_catalog.core.settings import get_app_settings
from photo_catalog.features.health.router import router as health_router
from photo_catalog.features.photos.router import router as photos_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from photo_catalog.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    # Health stays unprefixed so probes do not depend on API versioning
    app.include_router(health_router)
    app.include_router(photos_router, prefix=api_prefix)

    logger.info("Routers registered", extra={"api_prefix": api_prefix})
