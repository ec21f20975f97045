"""API router for the photo catalog.

Endpoints:
    Reading (secret key optional, unlocks unpublished photos):
        GET  /gallery                               - Newest-first gallery page
        GET  /gallery/tagged/{tagged}               - Gallery page restricted to a tag
        GET  /photo/by-id/{photo_id}                - Single photo or null
        GET  /photo/by-id/{photo_id}/neighbours     - Photo with adjacent ids

    Writing (valid secret key required):
        POST /photos                                - Create (201) or report conflict (409)
        POST /photo/by-filestem/{file_stem}         - Diffing update
        POST /photo/by-id/{photo_id}/published      - Set publication flag (JSON bool body)
        POST /photo/by-id/{photo_id}/height-offset  - Set height offset (JSON int body)

Paging:
    ``offset`` is a signed cursor: ``n >= 0`` lists photos older than id ``n``,
    ``n < 0`` lists photos newer than id ``-n - 1``. Each gallery response
    carries ready-made query strings for the newest, newer, older and oldest
    pages.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from photo_catalog.core.dependencies import DbSessionDep
from photo_catalog.core.exceptions import NotFoundException
from photo_catalog.features.photos.dependencies import (
    CatalogRepositoryDep,
    GalleryServiceDep,
    VisibilityDep,
)
from photo_catalog.features.photos.repository import Conflict, Created
from photo_catalog.features.photos.schemas import (
    GalleryPage,
    PhotoConflictResponse,
    PhotoCreatedResponse,
    PhotoPayload,
    PhotoRead,
    PhotoUpdatedResponse,
    PhotoWithNeighbours,
    PublishedResponse,
)
from photo_catalog.features.secret_keys.dependencies import require_secret_key

router = APIRouter(tags=["photos"])
logger = logging.getLogger(__name__)

LimitQuery = Annotated[
    int | None,
    Query(ge=0, le=255, description="Photos per page; falls back to the default when too large"),
]
OffsetQuery = Annotated[
    int | None,
    Query(description="Signed page cursor (see module docstring)"),
]
RequireKey = [Depends(require_secret_key)]


# ──────────────────────────────────────────────────────────────
# Reading
# ──────────────────────────────────────────────────────────────


@router.get(
    "/gallery",
    response_model=GalleryPage,
    summary="Gallery page",
)
async def gallery(
    service: GalleryServiceDep,
    visibility: VisibilityDep,
    limit: LimitQuery = None,
    offset: OffsetQuery = None,
) -> GalleryPage:
    return await service.gallery_page(visibility=visibility, limit=limit, offset=offset)


@router.get(
    "/gallery/tagged/{tagged}",
    response_model=GalleryPage,
    summary="Gallery page filtered by tag",
)
async def gallery_tagged(
    tagged: str,
    service: GalleryServiceDep,
    visibility: VisibilityDep,
    limit: LimitQuery = None,
    offset: OffsetQuery = None,
) -> GalleryPage:
    return await service.gallery_page(
        visibility=visibility,
        limit=limit,
        offset=offset,
        tagged=tagged,
    )


@router.get(
    "/photo/by-id/{photo_id}",
    response_model=PhotoRead | None,
    summary="Get a photo",
    description="Returns null when the photo does not exist or is not visible to the caller.",
)
async def get_photo(
    photo_id: int,
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
    visibility: VisibilityDep,
) -> PhotoRead | None:
    return await repo.get_photo_by_id(session, photo_id, visibility)


@router.get(
    "/photo/by-id/{photo_id}/neighbours",
    response_model=PhotoWithNeighbours,
    summary="Get a photo with the ids of its neighbours",
)
async def get_photo_with_neighbours(
    photo_id: int,
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
    visibility: VisibilityDep,
) -> PhotoWithNeighbours:
    found = await repo.get_photo_with_neighbours(session, photo_id, visibility)
    if found is None:
        raise NotFoundException(
            detail=f"Photo with id {photo_id} not found",
            type="photo-not-found",
            extra={"photo_id": photo_id},
        )
    photo, newer_id, older_id = found
    return PhotoWithNeighbours(photo=photo, newer_id=newer_id, older_id=older_id)


# ──────────────────────────────────────────────────────────────
# Writing
# ──────────────────────────────────────────────────────────────


@router.post(
    "/photos",
    status_code=status.HTTP_201_CREATED,
    response_model=PhotoCreatedResponse,
    responses={status.HTTP_409_CONFLICT: {"model": PhotoConflictResponse}},
    dependencies=RequireKey,
    summary="Create a photo",
)
async def create_photo(
    payload: PhotoPayload,
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
) -> PhotoCreatedResponse | JSONResponse:
    match await repo.create_photo(session, payload):
        case Created(id=photo_id, photo=photo):
            logger.info("Photo created", extra={"photo_id": photo_id, "file_stem": photo.file_stem})
            return PhotoCreatedResponse(id=photo_id, created=photo)
        case Conflict(existing=existing):
            body = PhotoConflictResponse(
                reason=f"Photo with file stem {payload.file_stem} already exists.",
                existing=existing,
            )
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=body.model_dump(mode="json"),
            )


@router.post(
    "/photo/by-filestem/{file_stem}",
    response_model=PhotoUpdatedResponse,
    dependencies=RequireKey,
    summary="Update a photo",
    description="Writes only the fields that differ. Omitting sources keeps the current ones.",
)
async def update_photo(
    file_stem: str,
    payload: PhotoPayload,
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
) -> PhotoUpdatedResponse:
    updated = await repo.update_photo(session, file_stem, payload)
    if updated is None:
        raise NotFoundException(
            detail=f"Photo with file stem {file_stem} not found",
            type="photo-not-found",
            extra={"file_stem": file_stem},
        )
    return PhotoUpdatedResponse(
        changed=updated.changed,
        previous=updated.previous,
        current=updated.current,
    )


@router.post(
    "/photo/by-id/{photo_id}/published",
    response_model=PublishedResponse,
    dependencies=RequireKey,
    summary="Publish or unpublish a photo",
)
async def set_published(
    photo_id: int,
    published: Annotated[bool, Body()],
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
) -> PublishedResponse:
    if not await repo.set_published(session, photo_id, published):
        raise _photo_not_found(photo_id)
    return PublishedResponse(published=published)


@router.post(
    "/photo/by-id/{photo_id}/height-offset",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=RequireKey,
    summary="Set a photo's thumbnail height offset",
)
async def set_height_offset(
    photo_id: int,
    height_offset: Annotated[int, Body()],
    session: DbSessionDep,
    repo: CatalogRepositoryDep,
) -> Response:
    if not await repo.set_height_offset(session, photo_id, height_offset):
        raise _photo_not_found(photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _photo_not_found(photo_id: int) -> NotFoundException:
    return NotFoundException(
        detail=f"Photo with id {photo_id} not found",
        type="photo-not-found",
        extra={"photo_id": photo_id},
    )
