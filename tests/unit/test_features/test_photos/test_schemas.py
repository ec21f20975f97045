"""Unit tests for photo schemas."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from photo_catalog.features.photos.schemas import PhotoPayload, PhotoRead, SourceSchema


@pytest.mark.unit
class TestPhotoRead:
    """Display view of a photo."""

    def test_sources_are_ordered_widest_first(self):
        photo = PhotoRead(
            id=10,
            file_stem="sunset",
            height_offset=50,
            sources=[
                {"width": 400, "height": 300, "url": "https://img.example/b"},
                {"width": 800, "height": 600, "url": "https://img.example/a"},
            ],
        )

        assert [(s.width, s.height, s.url) for s in photo.sources] == [
            (800, 600, "https://img.example/a"),
            (400, 300, "https://img.example/b"),
        ]

    def test_equal_widths_keep_stored_order(self):
        photo = PhotoRead(
            id=1,
            file_stem="pano",
            height_offset=50,
            sources=[
                {"width": 400, "height": 100, "url": "https://img.example/wide"},
                {"width": 400, "height": 300, "url": "https://img.example/tall"},
            ],
        )

        assert [s.url for s in photo.sources] == ["https://img.example/wide", "https://img.example/tall"]


@pytest.mark.unit
class TestPhotoPayload:
    """Create/update bodies."""

    def test_sources_default_to_unchanged(self):
        payload = PhotoPayload(file_stem="sunset")

        assert payload.sources is None
        assert payload.tags == []

    def test_empty_file_stem_is_rejected(self):
        with pytest.raises(ValidationError):
            PhotoPayload(file_stem="")

    @pytest.mark.parametrize("width", [0, -1, 10000])
    def test_source_dimensions_are_bounded(self, width: int):
        with pytest.raises(ValidationError):
            SourceSchema(width=width, height=10, url="https://img.example/x")

    def test_sources_compare_by_value(self):
        a = SourceSchema(width=800, height=600, url="https://img.example/a")

        assert a == SourceSchema(width=800, height=600, url="https://img.example/a")
        assert a != SourceSchema(width=800, height=600, url="https://img.example/b")
