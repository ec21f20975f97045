"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from photo_catalog.core.settings import get_gallery_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .app import AppSettings
from .gallery import GallerySettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_gallery_settings,
    get_logging_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "GallerySettings",
    "LoggingSettings",
    "PostgresSettings",
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_gallery_settings",
    "get_logging_settings",
    "get_settings",
]
