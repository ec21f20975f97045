"""Field-level diffing writes for photos.

``apply`` compares a stored photo with an incoming payload and issues one
UPDATE per differing column. Sources are compared as a whole list; any
difference replaces them all. Neither method commits: callers wrap them in
``BaseRepository.transaction`` so every write of one operation lands
together or not at all.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, update

from photo_catalog.features.photos.exceptions import PhotoValidationError
from photo_catalog.features.photos.models import Photo, Source

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from photo_catalog.features.photos.schemas import PhotoPayload, PhotoRead, SourceSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Outcome of a diffing update.

    Attributes:
        fields: Names of the fields that were rewritten, in write order.
    """

    fields: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.fields)


class DiffingUpdater:
    """Write only what differs between a stored photo and a payload."""

    async def apply(
        self,
        session: AsyncSession,
        old: PhotoRead,
        payload: PhotoPayload,
    ) -> DiffResult:
        """Diff ``payload`` against ``old`` and write the differences.

        Args:
            session: Session inside an open unit of work
            old: Current state, sources in display order (widest first)
            payload: Requested state; ``sources=None`` keeps the current sources

        Returns:
            DiffResult naming every rewritten field (empty when nothing differed)
        """
        written: list[str] = []
        extra = {"photo_id": old.id, "file_stem": old.file_stem}

        if old.taken_timestamp != payload.taken_timestamp:
            logger.info("Taken timestamp differs, updating", extra=extra)
            await self._set_column(session, old.id, taken_timestamp=payload.taken_timestamp)
            written.append("taken_timestamp")

        if old.title != payload.title:
            logger.info("Title differs, updating", extra=extra)
            await self._set_column(session, old.id, title=payload.title)
            written.append("title")

        # Order-sensitive: reordering tags is a change worth storing.
        if old.tags != payload.tags:
            logger.info("Tags differ, updating", extra=extra)
            await self._set_column(session, old.id, tags=list(payload.tags))
            written.append("tags")

        if payload.sources is not None and list(old.sources) != list(payload.sources):
            logger.info("Sources differ, updating", extra=extra)
            await self._replace_sources(session, old.id, payload.sources)
            written.append("sources")

        return DiffResult(fields=tuple(written))

    async def insert(self, session: AsyncSession, payload: PhotoPayload) -> int:
        """Insert a new, unpublished photo with its sources.

        Returns:
            The id assigned by the store

        Raises:
            PhotoValidationError: If the payload carries no sources
        """
        if payload.sources is None:
            raise PhotoValidationError(
                "sources are required when creating a photo",
                field="sources",
            )

        photo = Photo(
            file_stem=payload.file_stem,
            title=payload.title,
            taken_timestamp=payload.taken_timestamp,
            tags=list(payload.tags),
            published=False,
            sources=[
                Source(width=source.width, height=source.height, url=source.url)
                for source in payload.sources
            ],
        )
        session.add(photo)
        await session.flush()
        logger.info(
            "Photo inserted",
            extra={"photo_id": photo.id, "file_stem": photo.file_stem, "sources": len(payload.sources)},
        )
        return photo.id

    @staticmethod
    async def _set_column(session: AsyncSession, photo_id: int, **values: Any) -> None:
        stmt = (
            update(Photo)
            .where(Photo.id == photo_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    @staticmethod
    async def _replace_sources(
        session: AsyncSession,
        photo_id: int,
        sources: list[SourceSchema],
    ) -> None:
        await session.execute(
            delete(Source)
            .where(Source.photo_id == photo_id)
            .execution_options(synchronize_session=False),
        )
        if sources:
            await session.execute(
                insert(Source),
                [
                    {
                        "photo_id": photo_id,
                        "width": source.width,
                        "height": source.height,
                        "url": source.url,
                    }
                    for source in sources
                ],
            )


__all__ = ["DiffResult", "DiffingUpdater"]
