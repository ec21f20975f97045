"""Gallery assembly: one page, its facets and its navigation links."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from photo_catalog.core.pagination import OLDEST_OFFSET, After, Before, CursorCodec
from photo_catalog.features.photos.filters import FilterSpec
from photo_catalog.features.photos.repository import get_catalog_repository
from photo_catalog.features.photos.schemas import GalleryLinks, GalleryPage
from photo_catalog.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.core.settings import GallerySettings
    from photo_catalog.features.photos.filters import Visibility
    from photo_catalog.features.photos.repository import CatalogRepository

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


def _query_string(limit: int | None, offset: int | None) -> str:
    params: dict[str, int] = {}
    if limit is not None:
        params["limit"] = limit
    if offset is not None:
        params["offset"] = offset
    return urlencode(params)


def build_links(
    requested_limit: int | None,
    newer_id: int | None,
    older_id: int | None,
) -> GalleryLinks:
    """Navigation query strings for a gallery page.

    ``limit`` is carried over only when the caller asked for one, so links
    from a default-sized page stay default-sized.
    """
    newer = (
        _query_string(requested_limit, CursorCodec.encode(After(newer_id)))
        if newer_id is not None
        else None
    )
    older = (
        _query_string(requested_limit, CursorCodec.encode(Before(older_id)))
        if older_id is not None
        else None
    )
    return GalleryLinks(
        newest=_query_string(requested_limit, None),
        newer=newer,
        older=older,
        oldest=_query_string(requested_limit, OLDEST_OFFSET),
    )


class GalleryService:
    """Answer gallery requests with a single consistent filter."""

    def __init__(
        self,
        session: AsyncSession,
        settings: GallerySettings,
        repo: CatalogRepository | None = None,
    ) -> None:
        self._session = session
        self._settings = settings
        self._repo = repo or get_catalog_repository()

    async def gallery_page(
        self,
        *,
        visibility: Visibility,
        limit: int | None = None,
        offset: int | None = None,
        tagged: str | None = None,
    ) -> GalleryPage:
        """Build one gallery page.

        Raises:
            InvalidCursorError: If ``offset`` is outside the cursor range
        """
        anchor = CursorCodec.decode(offset)
        spec = FilterSpec.build(tagged=tagged, visibility=visibility)
        page_size = self._settings.resolve_limit(limit)

        photos = await self._repo.get_photo_page(self._session, page_size, anchor, spec)
        newer_id, older_id = await self._repo.get_pagination_ids(self._session, photos, spec)
        tags = await self._repo.get_tag_counts(self._session, spec)

        lazy_logger.debug(
            lambda: f"gallery {anchor!r}: {len(photos)} photos, newer={newer_id} older={older_id}"
        )
        return GalleryPage(
            photos=photos,
            tags=tags,
            links=build_links(limit, newer_id, older_id),
            tagged=tagged,
        )
