"""Gallery page-size settings.

Environment variables use GALLERY_ prefix.
Example: GALLERY_DEFAULT_PHOTOS_PER_PAGE=20, GALLERY_MAX_PHOTOS_PER_PAGE=50
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GallerySettings(BaseSettings):
    """Page-size limits for gallery listings.

    Attributes:
        default_photos_per_page: Page size used when the caller supplies none,
            or one that is not below ``max_photos_per_page``.
        max_photos_per_page: Exclusive upper bound on a caller-supplied size.
    """

    default_photos_per_page: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Default number of photos per gallery page",
    )
    max_photos_per_page: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Requested page sizes at or above this fall back to the default",
    )

    model_config = SettingsConfigDict(
        env_prefix="GALLERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> GallerySettings:
        if self.default_photos_per_page > self.max_photos_per_page:
            msg = "default_photos_per_page must not exceed max_photos_per_page"
            raise ValueError(msg)
        return self

    def resolve_limit(self, requested: int | None) -> int:
        """Pick the page size for a request.

        A requested size from zero up to, but not including, the maximum is
        honoured. A missing, negative or too large size falls back to the default.
        """
        if requested is not None and 0 <= requested < self.max_photos_per_page:
            return requested
        return self.default_photos_per_page
