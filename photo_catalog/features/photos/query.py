"""Keyset page queries over the photo catalog.

A page is always presented newest first. ``Latest`` and ``Before`` anchors
are fetched in that order directly; ``After`` anchors must scan upwards from
the boundary to find the *nearest* newer rows, so they are fetched oldest
first and flipped before being returned.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from photo_catalog.core.pagination import After, Before, Latest, PageAnchor
from photo_catalog.features.photos.models import Photo
from photo_catalog.features.photos.sql import tags_contain
from photo_catalog.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.features.photos.filters import FilterSpec

_lazy = get_lazy_logger(__name__)


class Ordering(StrEnum):
    """Database fetch direction of a page query."""

    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"


class CatalogQueryBuilder:
    """Compose page statements for one database dialect."""

    __slots__ = ("dialect_name",)

    def __init__(self, dialect_name: str) -> None:
        self.dialect_name = dialect_name

    @classmethod
    def for_session(cls, session: AsyncSession) -> CatalogQueryBuilder:
        return cls(session.get_bind().dialect.name)

    def filter_clauses(self, spec: FilterSpec) -> list[ColumnElement[bool]]:
        """WHERE clauses implementing ``spec`` (shared with facet counting)."""
        clauses: list[ColumnElement[bool]] = []
        if spec.tagged:
            clauses.append(tags_contain(self.dialect_name, spec.tagged))
        if spec.only_published:
            clauses.append(Photo.published.is_(True))
        return clauses

    def build_page_query(
        self,
        limit: int,
        anchor: PageAnchor,
        spec: FilterSpec,
        *,
        ids_only: bool = False,
    ) -> tuple[Select[Any], Ordering]:
        """Build the statement for one page.

        Args:
            limit: Maximum number of photos (already clamped by the caller)
            anchor: Page boundary and direction
            spec: Active filters
            ids_only: Select only the id column (existence probes)

        Returns:
            The select (one row per photo, sources eager-loaded) and the
            order the database returns rows in.
        """
        if ids_only:
            stmt = select(Photo.id)
        else:
            stmt = select(Photo).options(selectinload(Photo.sources))

        match anchor:
            case Latest():
                ordering = Ordering.NEWEST_FIRST
            case Before(id=boundary):
                stmt = stmt.where(Photo.id < boundary)
                ordering = Ordering.NEWEST_FIRST
            case After(id=boundary):
                stmt = stmt.where(Photo.id > boundary)
                ordering = Ordering.OLDEST_FIRST
            case _:
                assert_never(anchor)

        for clause in self.filter_clauses(spec):
            stmt = stmt.where(clause)

        order_by = Photo.id.desc() if ordering is Ordering.NEWEST_FIRST else Photo.id.asc()
        return stmt.order_by(order_by).limit(limit), ordering

    async def fetch_page(
        self,
        session: AsyncSession,
        limit: int,
        anchor: PageAnchor,
        spec: FilterSpec,
    ) -> list[Photo]:
        """Run a page query and return its photos newest first."""
        stmt, ordering = self.build_page_query(limit, anchor, spec)
        result = await session.execute(stmt)
        photos: Sequence[Photo] = result.scalars().all()

        _lazy.debug(
            lambda: f"page {anchor!r} fetched {ordering.value}: {[p.id for p in photos]}"
        )
        return sorted(photos, key=lambda photo: photo.id, reverse=True)


__all__ = ["CatalogQueryBuilder", "Ordering"]
