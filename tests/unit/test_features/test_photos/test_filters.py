"""Unit tests for FilterSpec."""
from __future__ import annotations

import pytest

from photo_catalog.features.photos.filters import FilterSpec, Visibility


@pytest.mark.unit
class TestFilterSpec:
    """FilterSpec construction."""

    def test_defaults_hide_unpublished(self):
        spec = FilterSpec()

        assert spec.tagged is None
        assert spec.only_published is True

    def test_single_tag_is_promoted(self):
        spec = FilterSpec.build(tagged="beach")

        assert spec.tagged == frozenset({"beach"})

    def test_tag_collection_is_deduplicated(self):
        spec = FilterSpec.build(tagged=["beach", "sunset", "beach"])

        assert spec.tagged == frozenset({"beach", "sunset"})

    def test_empty_collection_disables_tag_filter(self):
        assert FilterSpec.build(tagged=[]).tagged is None

    def test_visibility_all(self):
        spec = FilterSpec.build(visibility=Visibility.ALL)

        assert spec.only_published is False

    def test_spec_is_hashable_and_immutable(self):
        spec = FilterSpec.build(tagged="beach")

        assert spec == FilterSpec.build(tagged=["beach"])
        assert hash(spec) == hash(FilterSpec.build(tagged="beach"))
        with pytest.raises(AttributeError):
            spec.visibility = Visibility.ALL  # type: ignore[misc]
