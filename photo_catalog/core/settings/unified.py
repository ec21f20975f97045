"""Unified settings composition for convenient access.

Usage:
    from photo_catalog.core.settings import get_settings

    settings = get_settings()
    print(settings.gallery.default_photos_per_page)
    print(settings.db.pool_size)

Each nested settings class still respects its own env prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .app import AppSettings
from .gallery import GallerySettings
from .logs import LoggingSettings
from .postgres import PostgresSettings


@dataclass(frozen=True, slots=True)
class Settings:
    """All settings domains in one object."""

    app: AppSettings
    db: PostgresSettings
    gallery: GallerySettings
    logging: LoggingSettings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings built from the per-domain loaders."""
    from .loader import (
        get_app_settings,
        get_db_settings,
        get_gallery_settings,
        get_logging_settings,
    )

    return Settings(
        app=get_app_settings(),
        db=get_db_settings(),
        gallery=get_gallery_settings(),
        logging=get_logging_settings(),
    )
