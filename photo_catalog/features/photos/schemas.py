"""Pydantic schemas for the photos feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from photo_catalog.features.photos.models import MAX_HEIGHT_OFFSET, MAX_SOURCE_DIMENSION


class SourceSchema(BaseModel):
    """One rendered variant of a photo."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    width: int = Field(..., gt=0, lt=MAX_SOURCE_DIMENSION)
    height: int = Field(..., gt=0, lt=MAX_SOURCE_DIMENSION)
    url: str = Field(..., min_length=1, max_length=2048)


class PhotoPayload(BaseModel):
    """Create/update body.

    ``sources`` left out means "keep the current sources" on update; it is
    required on create.
    """

    file_stem: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=500)
    taken_timestamp: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list)
    sources: list[SourceSchema] | None = None


class PhotoRead(BaseModel):
    """A photo as presented to callers, sources largest first."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    file_stem: str
    title: str | None = None
    taken_timestamp: str | None = None
    height_offset: int = Field(..., ge=0, le=MAX_HEIGHT_OFFSET)
    tags: list[str] = Field(default_factory=list)
    sources: list[SourceSchema] = Field(default_factory=list)
    published: bool = False

    @field_validator("sources")
    @classmethod
    def order_by_width(cls, v: list[SourceSchema]) -> list[SourceSchema]:
        """Sort sources by width, widest first (stable for equal widths)."""
        return sorted(v, key=lambda source: source.width, reverse=True)


class TagCount(BaseModel):
    """Number of photos carrying a tag under the active filter."""

    tag: str
    count: int


class PhotoPage(BaseModel):
    """A page of photos plus the ids that anchor its neighbouring pages."""

    photos: list[PhotoRead]
    newer_id: int | None = None
    older_id: int | None = None


class PhotoWithNeighbours(BaseModel):
    """Single photo for detail views with its adjacent ids."""

    photo: PhotoRead
    newer_id: int | None = None
    older_id: int | None = None


class GalleryLinks(BaseModel):
    """Navigation query strings (without the leading ``?``)."""

    newest: str
    newer: str | None = None
    older: str | None = None
    oldest: str


class GalleryPage(BaseModel):
    """Gallery response: photos, tag facets and navigation."""

    photos: list[PhotoRead]
    tags: list[TagCount]
    links: GalleryLinks
    tagged: str | None = None


class PhotoCreatedResponse(BaseModel):
    id: int
    created: PhotoRead


class PhotoConflictResponse(BaseModel):
    reason: str
    existing: PhotoRead


class PhotoUpdatedResponse(BaseModel):
    changed: bool
    previous: PhotoRead
    current: PhotoRead


class PublishedResponse(BaseModel):
    published: bool
