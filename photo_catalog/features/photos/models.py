"""SQLAlchemy models for the photo catalog."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    false,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from photo_catalog.core.database import Base, IntegerPKMixin, StringArray

DEFAULT_HEIGHT_OFFSET = 50
MAX_HEIGHT_OFFSET = 100
MAX_SOURCE_DIMENSION = 10000


class Photo(Base, IntegerPKMixin):
    """A catalogued photo.

    Ids are assigned on insert and are the catalog's only sort key; newer
    photos always have larger ids.
    """

    __tablename__ = "photos"
    __table_args__ = (
        UniqueConstraint("file_stem"),
        CheckConstraint(
            f"height_offset >= 0 AND height_offset <= {MAX_HEIGHT_OFFSET}",
            name="height_offset_range",
        ),
        Index(
            "ix_photos_tags",
            "tags",
            postgresql_using="gin",
        ),
        {"sqlite_autoincrement": True},
    )

    file_stem: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Natural key shared with the upload pipeline (file name without extension)",
    )
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    taken_timestamp: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Capture time as supplied by the uploader; stored verbatim",
    )
    height_offset: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_HEIGHT_OFFSET,
        server_default=text(str(DEFAULT_HEIGHT_OFFSET)),
        comment="Vertical crop hint (percent) for thumbnails",
    )
    tags: Mapped[list[str]] = mapped_column(
        StringArray(),
        nullable=False,
        default=list,
    )
    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    sources: Mapped[list[Source]] = relationship(
        back_populates="photo",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Source.id",
    )

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, file_stem={self.file_stem!r})>"


class Source(Base, IntegerPKMixin):
    """One rendered variant (size) of a photo."""

    __tablename__ = "sources"
    __table_args__ = (
        UniqueConstraint("photo_id", "width", "height"),
        UniqueConstraint("url"),
        CheckConstraint(f"width > 0 AND width < {MAX_SOURCE_DIMENSION}", name="width_range"),
        CheckConstraint(f"height > 0 AND height < {MAX_SOURCE_DIMENSION}", name="height_range"),
    )

    photo_id: Mapped[int] = mapped_column(
        ForeignKey("photos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    width: Mapped[int] = mapped_column(Integer, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    photo: Mapped[Photo] = relationship(back_populates="sources")

    def __repr__(self) -> str:
        return f"<Source(photo_id={self.photo_id}, {self.width}x{self.height})>"
