"""Dependencies for photo routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from photo_catalog.core.dependencies import DbSessionDep
from photo_catalog.core.settings import GallerySettings, get_gallery_settings
from photo_catalog.features.photos.filters import Visibility
from photo_catalog.features.photos.repository import (
    SqlCatalogRepository,
    get_catalog_repository,
)
from photo_catalog.features.photos.service import GalleryService
from photo_catalog.features.secret_keys.dependencies import KeyStatus, KeyStatusDep


async def get_visibility(status: KeyStatusDep) -> Visibility:
    """Callers holding a valid secret key also see unpublished photos."""
    return Visibility.ALL if status is KeyStatus.VALID else Visibility.ONLY_PUBLISHED


def get_gallery_service(
    session: DbSessionDep,
    settings: Annotated[GallerySettings, Depends(get_gallery_settings)],
    repo: Annotated[SqlCatalogRepository, Depends(get_catalog_repository)],
) -> GalleryService:
    return GalleryService(session, settings, repo)


VisibilityDep = Annotated[Visibility, Depends(get_visibility)]
CatalogRepositoryDep = Annotated[SqlCatalogRepository, Depends(get_catalog_repository)]
GalleryServiceDep = Annotated[GalleryService, Depends(get_gallery_service)]
