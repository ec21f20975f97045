"""Signed-integer cursor encoding for keyset pagination.

Callers never see a page anchor directly. They pass a single optional
signed integer ``offset`` that carries both a boundary id and a direction:

    None        -> Latest          (start at the newest photo)
    offset >= 0 -> Before(offset)  (strictly older than ``offset``)
    offset < 0  -> After(-offset - 1)  (strictly newer than ``-offset - 1``)

Photo ids are 32-bit signed integers, so the usable id domain is
``0 .. 2**31 - 1`` and the offset domain is ``-2**31 .. 2**31 - 1``. Inside
those bounds the mapping is a bijection; anything outside raises
``InvalidCursorError``.

Example:
    anchor = CursorCodec.decode(request_offset)
    match anchor:
        case Latest():
            ...
        case Before(id=boundary):
            ...
        case After(id=boundary):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias, assert_never

from photo_catalog.core.database.exceptions import InvalidCursorError

MAX_PHOTO_ID: Final = 2**31 - 1
MIN_OFFSET: Final = -(2**31)
MAX_OFFSET: Final = MAX_PHOTO_ID

# Fixed link target for "oldest page". It decodes to After(0), i.e. the
# oldest photos fetched upwards from the bottom of the catalog. It is a
# sentinel, not the output of CursorCodec.encode for any real boundary.
OLDEST_OFFSET: Final = -1


@dataclass(slots=True, frozen=True)
class Latest:
    """No boundary: the page starts at the newest photo."""


@dataclass(slots=True, frozen=True)
class Before:
    """Photos with an id strictly lower than ``id`` (older)."""

    id: int


@dataclass(slots=True, frozen=True)
class After:
    """Photos with an id strictly greater than ``id`` (newer)."""

    id: int


PageAnchor: TypeAlias = Latest | Before | After


def _check_id(photo_id: int) -> int:
    if not 0 <= photo_id <= MAX_PHOTO_ID:
        raise InvalidCursorError(
            f"Photo id {photo_id} is outside the cursor range 0..{MAX_PHOTO_ID}",
            offset=photo_id,
        )
    return photo_id


class CursorCodec:
    """Map external offsets to page anchors and back."""

    @staticmethod
    def decode(offset: int | None) -> PageAnchor:
        """Decode an external offset into a page anchor.

        Args:
            offset: Signed offset from the request, or None for the first page

        Returns:
            Latest, Before or After

        Raises:
            InvalidCursorError: If the offset does not fit in 32 bits
        """
        if offset is None:
            return Latest()
        if not MIN_OFFSET <= offset <= MAX_OFFSET:
            raise InvalidCursorError(
                f"Offset {offset} is outside the cursor range {MIN_OFFSET}..{MAX_OFFSET}",
                offset=offset,
            )
        if offset >= 0:
            return Before(offset)
        return After(-offset - 1)

    @staticmethod
    def encode(anchor: PageAnchor) -> int | None:
        """Encode a page anchor back into an external offset.

        ``Latest`` encodes to None (no offset parameter at all).
        """
        match anchor:
            case Latest():
                return None
            case Before(id=photo_id):
                return _check_id(photo_id)
            case After(id=photo_id):
                return -_check_id(photo_id) - 1
            case _:
                assert_never(anchor)


__all__ = [
    "MAX_OFFSET",
    "MAX_PHOTO_ID",
    "MIN_OFFSET",
    "OLDEST_OFFSET",
    "After",
    "Before",
    "CursorCodec",
    "Latest",
    "PageAnchor",
]
