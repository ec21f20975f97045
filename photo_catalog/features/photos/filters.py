"""Request-scoped catalog filters."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class Visibility(StrEnum):
    """Which photos a caller may see."""

    ALL = "all"
    ONLY_PUBLISHED = "only_published"


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Tag containment and visibility filter for one request.

    Built once per request and passed unchanged to every query issued while
    answering it, so the page, its pagination probes and its tag facets all
    see the same subset of the catalog.

    Attributes:
        tagged: A photo qualifies only if its tags include every one of these.
            None disables tag filtering.
        visibility: ``ONLY_PUBLISHED`` hides unpublished photos.
    """

    tagged: frozenset[str] | None = None
    visibility: Visibility = Visibility.ONLY_PUBLISHED

    @classmethod
    def build(
        cls,
        *,
        tagged: str | Iterable[str] | None = None,
        visibility: Visibility = Visibility.ONLY_PUBLISHED,
    ) -> FilterSpec:
        """Build a filter, promoting a single tag to a one-element set."""
        match tagged:
            case None:
                tags = None
            case str():
                tags = frozenset({tagged})
            case _:
                tags = frozenset(tagged)
        return cls(tagged=tags or None, visibility=visibility)

    @property
    def only_published(self) -> bool:
        return self.visibility is Visibility.ONLY_PUBLISHED


__all__ = ["FilterSpec", "Visibility"]
