"""Catalog repository: the single entry point for photo storage.

Route handlers depend on the ``CatalogRepository`` protocol; the SQLAlchemy
implementation composes the query builder, pagination resolver, facet
counter and diffing updater over one explicitly passed session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from photo_catalog.core.database import BaseRepository, StorageError
from photo_catalog.features.photos.exceptions import PhotoValidationError
from photo_catalog.features.photos.facets import TagFacetCounter
from photo_catalog.features.photos.filters import FilterSpec, Visibility
from photo_catalog.features.photos.models import MAX_HEIGHT_OFFSET, Photo
from photo_catalog.features.photos.pagination import PaginationResolver
from photo_catalog.features.photos.query import CatalogQueryBuilder
from photo_catalog.features.photos.schemas import PhotoRead, TagCount
from photo_catalog.features.photos.updater import DiffingUpdater

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.core.pagination import PageAnchor
    from photo_catalog.features.photos.schemas import PhotoPayload


@dataclass(frozen=True, slots=True)
class Created:
    """A new photo was stored."""

    id: int
    photo: PhotoRead


@dataclass(frozen=True, slots=True)
class Conflict:
    """A photo with the same file stem already exists; nothing was written."""

    existing: PhotoRead


CreateResult: TypeAlias = Created | Conflict


@dataclass(frozen=True, slots=True)
class Updated:
    """Snapshots around a diffing update."""

    changed: bool
    previous: PhotoRead
    current: PhotoRead


class CatalogRepository(Protocol):
    """Storage capabilities the web layer relies on."""

    async def get_photo_page(
        self,
        session: AsyncSession,
        limit: int,
        anchor: PageAnchor,
        spec: FilterSpec,
    ) -> list[PhotoRead]: ...

    async def get_pagination_ids(
        self,
        session: AsyncSession,
        page: Sequence[PhotoRead],
        spec: FilterSpec,
    ) -> tuple[int | None, int | None]: ...

    async def get_tag_counts(self, session: AsyncSession, spec: FilterSpec) -> list[TagCount]: ...

    async def get_photo_by_id(
        self,
        session: AsyncSession,
        photo_id: int,
        visibility: Visibility,
    ) -> PhotoRead | None: ...

    async def get_photo_by_file_stem(
        self,
        session: AsyncSession,
        file_stem: str,
        visibility: Visibility,
    ) -> PhotoRead | None: ...

    async def get_photo_with_neighbours(
        self,
        session: AsyncSession,
        photo_id: int,
        visibility: Visibility,
    ) -> tuple[PhotoRead, int | None, int | None] | None: ...

    async def create_photo(self, session: AsyncSession, payload: PhotoPayload) -> CreateResult: ...

    async def update_photo(
        self,
        session: AsyncSession,
        file_stem: str,
        payload: PhotoPayload,
    ) -> Updated | None: ...

    async def set_published(self, session: AsyncSession, photo_id: int, published: bool) -> bool: ...

    async def set_height_offset(self, session: AsyncSession, photo_id: int, height_offset: int) -> bool: ...


class SqlCatalogRepository(BaseRepository[Photo]):
    """SQLAlchemy implementation of ``CatalogRepository``.

    Inherits from BaseRepository:
        - storage_errors(operation) -> async context manager
        - transaction(session, operation) -> async context manager

    Reads run as standalone statements; every write operation is one
    transaction that commits once at the end.
    """

    __slots__ = ("_updater",)

    def __init__(self, updater: DiffingUpdater | None = None) -> None:
        super().__init__(Photo)
        self._updater = updater or DiffingUpdater()

    async def get_photo_page(
        self,
        session: AsyncSession,
        limit: int,
        anchor: PageAnchor,
        spec: FilterSpec,
    ) -> list[PhotoRead]:
        """Fetch one page, newest first, with at most ``limit`` photos."""
        self._logger.info(
            "Fetching photo page",
            extra={
                "anchor": repr(anchor),
                "limit": limit,
                "tagged": sorted(spec.tagged) if spec.tagged else None,
                "visibility": spec.visibility.value,
            },
        )
        builder = CatalogQueryBuilder.for_session(session)
        async with self.storage_errors("photos.page"):
            photos = await builder.fetch_page(session, limit, anchor, spec)
        return [PhotoRead.model_validate(photo) for photo in photos]

    async def get_pagination_ids(
        self,
        session: AsyncSession,
        page: Sequence[PhotoRead],
        spec: FilterSpec,
    ) -> tuple[int | None, int | None]:
        """Return ``(newer_id, older_id)`` anchoring the neighbouring pages."""
        resolver = PaginationResolver(CatalogQueryBuilder.for_session(session))
        async with self.storage_errors("photos.pagination"):
            return await resolver.resolve(session, page, spec)

    async def get_tag_counts(self, session: AsyncSession, spec: FilterSpec) -> list[TagCount]:
        """Count photos per tag under ``spec``, ordered by tag."""
        counter = TagFacetCounter(CatalogQueryBuilder.for_session(session))
        async with self.storage_errors("photos.tag_counts"):
            return await counter.counts(session, spec)

    async def get_photo_by_id(
        self,
        session: AsyncSession,
        photo_id: int,
        visibility: Visibility,
    ) -> PhotoRead | None:
        """Get a photo by id, or None if it is missing or hidden."""
        stmt = self._lookup(visibility).where(Photo.id == photo_id)
        return await self._fetch_one(session, stmt, "photos.get_by_id")

    async def get_photo_by_file_stem(
        self,
        session: AsyncSession,
        file_stem: str,
        visibility: Visibility,
    ) -> PhotoRead | None:
        """Get a photo by file stem, or None if it is missing or hidden."""
        stmt = self._lookup(visibility).where(Photo.file_stem == file_stem)
        return await self._fetch_one(session, stmt, "photos.get_by_file_stem")

    async def get_photo_with_neighbours(
        self,
        session: AsyncSession,
        photo_id: int,
        visibility: Visibility,
    ) -> tuple[PhotoRead, int | None, int | None] | None:
        """Get a photo plus the ids of its newer and older neighbours.

        The neighbour ids are the photo's own id when a photo exists on that
        side, so they can be encoded directly into navigation offsets.
        """
        photo = await self.get_photo_by_id(session, photo_id, visibility)
        if photo is None:
            return None
        newer_id, older_id = await self.get_pagination_ids(
            session,
            [photo],
            FilterSpec(visibility=visibility),
        )
        return photo, newer_id, older_id

    async def create_photo(self, session: AsyncSession, payload: PhotoPayload) -> CreateResult:
        """Store a new photo unless its file stem is taken.

        Raises:
            PhotoValidationError: If the payload has no sources
        """
        if payload.sources is None:
            raise PhotoValidationError(
                "sources are required when creating a photo",
                field="sources",
            )

        existing = await self.get_photo_by_file_stem(session, payload.file_stem, Visibility.ALL)
        if existing is not None:
            self._logger.info(
                "Photo already exists",
                extra={"file_stem": payload.file_stem, "photo_id": existing.id},
            )
            return Conflict(existing)

        try:
            async with self.transaction(session, "photos.create"):
                photo_id = await self._updater.insert(session, payload)
        except StorageError as exc:
            # A concurrent insert may have claimed the file stem in between.
            if not isinstance(exc.__cause__, IntegrityError):
                raise
            existing = await self.get_photo_by_file_stem(session, payload.file_stem, Visibility.ALL)
            if existing is None:
                raise
            return Conflict(existing)

        created = await self.get_photo_by_id(session, photo_id, Visibility.ALL)
        if created is None:
            msg = f"Photo {photo_id} vanished right after insert"
            raise RuntimeError(msg)
        return Created(id=photo_id, photo=created)

    async def update_photo(
        self,
        session: AsyncSession,
        file_stem: str,
        payload: PhotoPayload,
    ) -> Updated | None:
        """Apply a diffing update to the photo with ``file_stem``.

        Returns:
            Previous and current snapshots, or None if no such photo exists
        """
        async with self.transaction(session, "photos.update"):
            previous = await self.get_photo_by_file_stem(session, file_stem, Visibility.ALL)
            if previous is None:
                return None
            result = await self._updater.apply(session, previous, payload)

        current = await self.get_photo_by_id(session, previous.id, Visibility.ALL)
        if current is None:
            msg = f"Photo {previous.id} vanished during update"
            raise RuntimeError(msg)
        return Updated(changed=result.changed, previous=previous, current=current)

    async def set_published(self, session: AsyncSession, photo_id: int, published: bool) -> bool:
        """Set the publication flag; False when the photo does not exist."""
        return await self._set_column(session, photo_id, "photos.set_published", published=published)

    async def set_height_offset(self, session: AsyncSession, photo_id: int, height_offset: int) -> bool:
        """Set the thumbnail height offset; False when the photo does not exist.

        Raises:
            PhotoValidationError: If the offset is outside 0..100
        """
        if not 0 <= height_offset <= MAX_HEIGHT_OFFSET:
            raise PhotoValidationError(
                f"height_offset must be between 0 and {MAX_HEIGHT_OFFSET}",
                field="height_offset",
                value=height_offset,
            )
        return await self._set_column(
            session,
            photo_id,
            "photos.set_height_offset",
            height_offset=height_offset,
        )

    @staticmethod
    def _lookup(visibility: Visibility) -> Select[tuple[Photo]]:
        stmt = (
            select(Photo)
            .options(selectinload(Photo.sources))
            .execution_options(populate_existing=True)
        )
        if visibility is Visibility.ONLY_PUBLISHED:
            stmt = stmt.where(Photo.published.is_(True))
        return stmt

    async def _fetch_one(
        self,
        session: AsyncSession,
        stmt: Select[tuple[Photo]],
        operation: str,
    ) -> PhotoRead | None:
        async with self.storage_errors(operation):
            result = await session.execute(stmt)
            photo = result.scalar_one_or_none()

        self._lazy.debug(lambda: f"{operation} -> {photo!r}")
        return PhotoRead.model_validate(photo) if photo is not None else None

    async def _set_column(
        self,
        session: AsyncSession,
        photo_id: int,
        operation: str,
        **values: object,
    ) -> bool:
        stmt = (
            update(Photo)
            .where(Photo.id == photo_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self.transaction(session, operation):
            result = await session.execute(stmt)
            found = result.rowcount > 0
        self._logger.info(
            "Photo attribute written" if found else "Photo not found",
            extra={"photo_id": photo_id, "operation": operation, **values},
        )
        return found


_catalog_repository: SqlCatalogRepository | None = None


def get_catalog_repository() -> SqlCatalogRepository:
    """Get the process-wide catalog repository (usable as a FastAPI dependency)."""
    global _catalog_repository
    if _catalog_repository is None:
        _catalog_repository = SqlCatalogRepository()
    return _catalog_repository


__all__ = [
    "CatalogRepository",
    "Conflict",
    "CreateResult",
    "Created",
    "SqlCatalogRepository",
    "Updated",
    "get_catalog_repository",
]
