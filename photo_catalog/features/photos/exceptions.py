"""Photo-specific errors."""

from __future__ import annotations

from typing import Any

from photo_catalog.core.exceptions import ValidationException


class PhotoValidationError(ValidationException):
    """A photo payload or attribute value was rejected before reaching the store."""

    def __init__(self, detail: str, *, field: str, value: Any = None) -> None:
        super().__init__(
            detail=detail,
            type="photo-validation-error",
            extra={"field": field, "value": value},
        )
        self.field = field
