"""Neighbouring-page detection for catalog pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from photo_catalog.core.pagination import After, Before, PageAnchor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.features.photos.filters import FilterSpec
    from photo_catalog.features.photos.query import CatalogQueryBuilder
    from photo_catalog.features.photos.schemas import PhotoRead


class PaginationResolver:
    """Find out whether pages exist on either side of a fetched page.

    Each direction is a one-row existence probe through the same query
    builder and filter as the page itself. The probes run after the page
    query without a shared snapshot, so a concurrent write in between can
    make the answer stale; callers treat it as a navigation hint.
    """

    __slots__ = ("builder",)

    def __init__(self, builder: CatalogQueryBuilder) -> None:
        self.builder = builder

    async def resolve(
        self,
        session: AsyncSession,
        page: Sequence[PhotoRead],
        spec: FilterSpec,
    ) -> tuple[int | None, int | None]:
        """Return ``(newer_id, older_id)`` for a newest-first page.

        ``newer_id`` is the first photo's id when something newer matches
        ``spec``; ``older_id`` is the last photo's id when something older
        does. Both are None for an empty page.
        """
        if not page:
            return None, None

        first_id = page[0].id
        last_id = page[-1].id
        newer_id = first_id if await self._exists(session, After(first_id), spec) else None
        older_id = last_id if await self._exists(session, Before(last_id), spec) else None
        return newer_id, older_id

    async def _exists(
        self,
        session: AsyncSession,
        anchor: PageAnchor,
        spec: FilterSpec,
    ) -> bool:
        stmt, _ = self.builder.build_page_query(1, anchor, spec, ids_only=True)
        result = await session.execute(stmt)
        return result.first() is not None


__all__ = ["PaginationResolver"]
