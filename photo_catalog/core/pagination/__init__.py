"""Keyset pagination over the photo catalog.

The catalog is paged by photo id only. A page is anchored by a
``PageAnchor`` (``Latest``, ``Before(id)`` or ``After(id)``) which callers
exchange as one signed integer offset through ``CursorCodec``.
"""

from photo_catalog.core.pagination.cursor import (
    MAX_PHOTO_ID,
    OLDEST_OFFSET,
    After,
    Before,
    CursorCodec,
    Latest,
    PageAnchor,
)

__all__ = [
    "MAX_PHOTO_ID",
    "OLDEST_OFFSET",
    "After",
    "Before",
    "CursorCodec",
    "Latest",
    "PageAnchor",
]
