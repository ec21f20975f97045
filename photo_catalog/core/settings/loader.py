"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Testing:
    In tests, clear the cache to force reload:
    get_gallery_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .gallery import GallerySettings
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .unified import get_settings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> PostgresSettings:
    """Get cached database settings.

    Returns:
        Validated and frozen PostgresSettings instance.
    """
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_gallery_settings() -> GallerySettings:
    """Get cached gallery settings."""
    return GallerySettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


def clear_all_caches() -> None:
    """Drop every cached settings instance (used by tests and the CLI)."""
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_gallery_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_settings.cache_clear()
