"""Photo catalog feature: paging, tag facets and diffing updates."""

from .filters import FilterSpec, Visibility
from .models import Photo, Source
from .repository import (
    CatalogRepository,
    Conflict,
    Created,
    SqlCatalogRepository,
    Updated,
    get_catalog_repository,
)

__all__ = [
    "CatalogRepository",
    "Conflict",
    "Created",
    "FilterSpec",
    "Photo",
    "Source",
    "SqlCatalogRepository",
    "Updated",
    "Visibility",
    "get_catalog_repository",
]
