"""Tag facet counts under the active filter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from photo_catalog.features.photos.schemas import TagCount
from photo_catalog.features.photos.sql import tag_facets_select

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.features.photos.filters import FilterSpec
    from photo_catalog.features.photos.query import CatalogQueryBuilder


class TagFacetCounter:
    """Count photos per tag, restricted by the same filter as the page."""

    __slots__ = ("builder",)

    def __init__(self, builder: CatalogQueryBuilder) -> None:
        self.builder = builder

    async def counts(self, session: AsyncSession, spec: FilterSpec) -> list[TagCount]:
        """Return one ``(tag, count)`` per distinct tag, ordered by tag name."""
        stmt, tag_column = tag_facets_select(self.builder.dialect_name)
        for clause in self.builder.filter_clauses(spec):
            stmt = stmt.where(clause)
        stmt = stmt.group_by(tag_column).order_by(tag_column)

        result = await session.execute(stmt)
        return [TagCount(tag=tag, count=count) for tag, count in result]


__all__ = ["TagFacetCounter"]
