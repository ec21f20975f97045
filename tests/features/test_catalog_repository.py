"""Integration-style tests for catalog pages, pagination probes and tag facets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from photo_catalog.core.pagination import After, Before, Latest
from photo_catalog.features.photos.filters import FilterSpec, Visibility
from photo_catalog.features.photos.models import Photo, Source
from photo_catalog.features.photos.repository import SqlCatalogRepository
from photo_catalog.features.photos.schemas import TagCount

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

ALL = FilterSpec(visibility=Visibility.ALL)


async def _persist(db_session: AsyncSession, **kwargs) -> Photo:
    kwargs.setdefault("file_stem", f"photo-{kwargs.get('id', 'x')}")
    kwargs.setdefault("published", True)
    photo = Photo(**kwargs)
    db_session.add(photo)
    await db_session.commit()
    await db_session.refresh(photo)
    return photo


async def _seed(db_session: AsyncSession, count: int, **kwargs) -> list[int]:
    ids = []
    for n in range(1, count + 1):
        photo = await _persist(db_session, id=n, file_stem=f"photo-{n}", **kwargs)
        ids.append(photo.id)
    return ids


@pytest.mark.asyncio
async def test_latest_page_is_newest_first(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 5)

    page = await repo.get_photo_page(db_session, 2, Latest(), ALL)

    assert [photo.id for photo in page] == [5, 4]


@pytest.mark.asyncio
async def test_pagination_ids_for_first_page(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 5)

    page = await repo.get_photo_page(db_session, 2, Latest(), ALL)
    newer_id, older_id = await repo.get_pagination_ids(db_session, page, ALL)

    assert newer_id is None
    assert older_id == 4


@pytest.mark.asyncio
async def test_before_page_and_its_neighbours(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 5)

    page = await repo.get_photo_page(db_session, 2, Before(4), ALL)
    newer_id, older_id = await repo.get_pagination_ids(db_session, page, ALL)

    assert [photo.id for photo in page] == [3, 2]
    assert (newer_id, older_id) == (3, 2)


@pytest.mark.asyncio
async def test_after_page_is_nearest_newer_photos_newest_first(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 5)

    page = await repo.get_photo_page(db_session, 2, After(1), ALL)

    assert [photo.id for photo in page] == [3, 2]


@pytest.mark.asyncio
async def test_oldest_page_from_after_zero(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 5)

    page = await repo.get_photo_page(db_session, 2, After(0), ALL)
    newer_id, older_id = await repo.get_pagination_ids(db_session, page, ALL)

    assert [photo.id for photo in page] == [2, 1]
    assert newer_id == 2
    assert older_id is None


@pytest.mark.asyncio
async def test_walking_older_pages_visits_every_photo_once(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 7)

    seen: list[int] = []
    anchor = Latest()
    while True:
        page = await repo.get_photo_page(db_session, 3, anchor, ALL)
        seen.extend(photo.id for photo in page)
        _, older_id = await repo.get_pagination_ids(db_session, page, ALL)
        if older_id is None:
            break
        anchor = Before(older_id)

    assert seen == [7, 6, 5, 4, 3, 2, 1]


@pytest.mark.asyncio
async def test_walking_newer_pages_from_oldest(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 7)

    seen: list[int] = []
    anchor = After(0)
    while True:
        page = await repo.get_photo_page(db_session, 3, anchor, ALL)
        seen = [photo.id for photo in page] + seen
        newer_id, _ = await repo.get_pagination_ids(db_session, page, ALL)
        if newer_id is None:
            break
        anchor = After(newer_id)

    assert seen == [7, 6, 5, 4, 3, 2, 1]


@pytest.mark.asyncio
async def test_empty_catalog(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()

    page = await repo.get_photo_page(db_session, 10, Latest(), ALL)

    assert page == []
    assert await repo.get_pagination_ids(db_session, page, ALL) == (None, None)
    assert await repo.get_tag_counts(db_session, ALL) == []


@pytest.mark.asyncio
async def test_unpublished_photos_are_hidden(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="public-1")
    await _persist(db_session, id=2, file_stem="draft", published=False)
    await _persist(db_session, id=3, file_stem="public-3")

    public = await repo.get_photo_page(db_session, 10, Latest(), FilterSpec())
    everything = await repo.get_photo_page(db_session, 10, Latest(), ALL)

    assert [photo.id for photo in public] == [3, 1]
    assert [photo.id for photo in everything] == [3, 2, 1]


@pytest.mark.asyncio
async def test_pagination_probes_respect_visibility(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="draft-1", published=False)
    await _persist(db_session, id=2, file_stem="public-2")
    await _persist(db_session, id=3, file_stem="draft-3", published=False)

    spec = FilterSpec()
    page = await repo.get_photo_page(db_session, 10, Latest(), spec)

    assert [photo.id for photo in page] == [2]
    assert await repo.get_pagination_ids(db_session, page, spec) == (None, None)


@pytest.mark.asyncio
async def test_tag_filter_requires_every_tag(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="a", tags=["beach", "sunset"])
    await _persist(db_session, id=2, file_stem="b", tags=["beach"])
    await _persist(db_session, id=3, file_stem="c", tags=["sunset", "city", "beach"])
    await _persist(db_session, id=4, file_stem="d", tags=[])

    beach = await repo.get_photo_page(db_session, 10, Latest(), FilterSpec.build(tagged="beach"))
    both = await repo.get_photo_page(
        db_session,
        10,
        Latest(),
        FilterSpec.build(tagged=["beach", "sunset"]),
    )

    assert [photo.id for photo in beach] == [3, 2, 1]
    assert [photo.id for photo in both] == [3, 1]
    assert all({"beach", "sunset"} <= set(photo.tags) for photo in both)


@pytest.mark.asyncio
async def test_tag_filtered_pagination_skips_untagged(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="a", tags=["beach"])
    await _persist(db_session, id=2, file_stem="b", tags=["city"])
    await _persist(db_session, id=3, file_stem="c", tags=["beach"])
    await _persist(db_session, id=4, file_stem="d", tags=["city"])

    spec = FilterSpec.build(tagged="beach")
    page = await repo.get_photo_page(db_session, 1, Latest(), spec)
    newer_id, older_id = await repo.get_pagination_ids(db_session, page, spec)

    assert [photo.id for photo in page] == [3]
    assert newer_id is None
    assert older_id == 3


@pytest.mark.asyncio
async def test_tag_counts_follow_the_filter(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="a", tags=["beach", "sunset"])
    await _persist(db_session, id=2, file_stem="b", tags=["beach"])
    await _persist(db_session, id=3, file_stem="c", tags=["city"], published=False)

    everything = await repo.get_tag_counts(db_session, ALL)
    public = await repo.get_tag_counts(db_session, FilterSpec())
    beach = await repo.get_tag_counts(db_session, FilterSpec.build(tagged="beach"))

    assert everything == [
        TagCount(tag="beach", count=2),
        TagCount(tag="city", count=1),
        TagCount(tag="sunset", count=1),
    ]
    assert [count.tag for count in public] == ["beach", "sunset"]
    assert beach == [TagCount(tag="beach", count=2), TagCount(tag="sunset", count=1)]


@pytest.mark.asyncio
async def test_page_sources_are_widest_first(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(
        db_session,
        id=10,
        file_stem="sunset",
        sources=[
            Source(width=400, height=300, url="https://img.example/b"),
            Source(width=800, height=600, url="https://img.example/a"),
        ],
    )

    page = await repo.get_photo_page(db_session, 10, Latest(), ALL)

    assert [(s.width, s.height, s.url) for s in page[0].sources] == [
        (800, 600, "https://img.example/a"),
        (400, 300, "https://img.example/b"),
    ]


@pytest.mark.asyncio
async def test_lookups_respect_visibility(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _persist(db_session, id=1, file_stem="draft", published=False)

    assert await repo.get_photo_by_id(db_session, 1, Visibility.ONLY_PUBLISHED) is None
    assert (await repo.get_photo_by_id(db_session, 1, Visibility.ALL)).file_stem == "draft"
    assert await repo.get_photo_by_file_stem(db_session, "draft", Visibility.ONLY_PUBLISHED) is None
    assert (await repo.get_photo_by_file_stem(db_session, "draft", Visibility.ALL)).id == 1
    assert await repo.get_photo_by_id(db_session, 99, Visibility.ALL) is None


@pytest.mark.asyncio
async def test_photo_with_neighbours(db_session: AsyncSession) -> None:
    repo = SqlCatalogRepository()
    await _seed(db_session, 3)

    middle = await repo.get_photo_with_neighbours(db_session, 2, Visibility.ALL)
    newest = await repo.get_photo_with_neighbours(db_session, 3, Visibility.ALL)

    assert middle is not None
    photo, newer_id, older_id = middle
    assert (photo.id, newer_id, older_id) == (2, 2, 2)
    assert newest is not None
    assert newest[1:] == (None, 3)
    assert await repo.get_photo_with_neighbours(db_session, 42, Visibility.ALL) is None
