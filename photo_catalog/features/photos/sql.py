"""Dialect-specific SQL for the ``tags`` array column.

PostgreSQL stores tags as ``VARCHAR[]`` and uses the array operators; other
dialects (SQLite in tests) store a JSON array and go through ``json_each``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, and_, cast, exists, func, select, true
from sqlalchemy.dialects.postgresql import ARRAY

from photo_catalog.features.photos.models import Photo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement, Select


def tags_contain(dialect_name: str, wanted: Iterable[str]) -> ColumnElement[bool]:
    """Predicate: the photo's tags are a superset of ``wanted``."""
    tags = sorted(wanted)
    if dialect_name == "postgresql":
        return Photo.tags.op("@>", is_comparison=True)(cast(tags, ARRAY(String)))

    clauses = []
    for tag in tags:
        element = func.json_each(Photo.tags).table_valued("value").alias()
        clauses.append(
            exists(select(element.c.value).where(element.c.value == tag)),
        )
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def tag_facets_select(dialect_name: str) -> tuple[Select[Any], Any]:
    """``SELECT tag, COUNT(*)`` over the unnested tags of every photo.

    Returns the select (without WHERE, GROUP BY or ORDER BY) and the tag
    column so the caller can group and order by it.
    """
    if dialect_name == "postgresql":
        unnested = func.unnest(Photo.tags).table_valued("tag").render_derived()
        tag_column = unnested.c.tag
    else:
        unnested = func.json_each(Photo.tags).table_valued("value")
        tag_column = unnested.c.value

    stmt = (
        select(tag_column.label("tag"), func.count().label("count"))
        .select_from(Photo)
        .join(unnested, true())
    )
    return stmt, tag_column


__all__ = ["tag_facets_select", "tags_contain"]
