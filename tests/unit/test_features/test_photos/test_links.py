"""Unit tests for gallery navigation links."""
from __future__ import annotations

from urllib.parse import parse_qs

import pytest

from photo_catalog.core.pagination import After, Before, CursorCodec
from photo_catalog.features.photos.service import build_links


@pytest.mark.unit
class TestBuildLinks:
    """Query strings for newest, newer, older and oldest pages."""

    def test_middle_page(self):
        links = build_links(None, newer_id=30, older_id=21)

        assert links.newest == ""
        assert links.newer == "offset=-31"
        assert links.older == "offset=21"
        assert links.oldest == "offset=-1"

    def test_offsets_decode_to_neighbouring_anchors(self):
        links = build_links(None, newer_id=30, older_id=21)

        newer = int(parse_qs(links.newer)["offset"][0])
        older = int(parse_qs(links.older)["offset"][0])

        assert CursorCodec.decode(newer) == After(30)
        assert CursorCodec.decode(older) == Before(21)

    def test_requested_limit_is_carried(self):
        links = build_links(5, newer_id=None, older_id=12)

        assert links.newest == "limit=5"
        assert links.newer is None
        assert links.older == "limit=5&offset=12"
        assert links.oldest == "limit=5&offset=-1"

    def test_single_page_has_no_neighbours(self):
        links = build_links(None, newer_id=None, older_id=None)

        assert links.newer is None
        assert links.older is None
