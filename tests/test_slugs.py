from __future__ import annotations

import pytest

from ditchfork.models.review import Album, Song
from ditchfork.services.slugs import allocate_unique, slugify


@pytest.mark.parametrize(
    ("artist", "title", "expected"),
    [
        ("Radiohead", "OK Computer", "radiohead-ok-computer"),
        ("", "", "untitled"),
        ("A&B", "C!!D", "a-b-c-d"),
        ("  Sigur Rós ", "( )", "sigur-r-s"),
        ("---", "!!!", "untitled"),
        ("", "Year-End List", "year-end-list"),
        ("AC/DC", "Back in Black", "ac-dc-back-in-black"),
    ],
)
def test_slugify(artist: str, title: str, expected: str) -> None:
    assert slugify(artist, title) == expected


async def _add(session, model, slug: str, **fields):
    record = model(slug=slug, artist=fields.get("artist", "x"), title=fields.get("title", "y"))
    session.add(record)
    await session.flush()
    return record


@pytest.mark.asyncio
async def test_allocate_returns_base_when_free(db_session) -> None:
    assert await allocate_unique(db_session, Album, "X", "Y") == "x-y"


@pytest.mark.asyncio
async def test_allocate_skips_taken_suffixes(db_session) -> None:
    await _add(db_session, Album, "x-y")
    await _add(db_session, Album, "x-y-2")
    assert await allocate_unique(db_session, Album, "X", "Y") == "x-y-3"


@pytest.mark.asyncio
async def test_uniqueness_is_per_category(db_session) -> None:
    await _add(db_session, Album, "x-y")
    assert await allocate_unique(db_session, Song, "X", "Y") == "x-y"


@pytest.mark.asyncio
async def test_excluded_record_keeps_its_own_slug(db_session) -> None:
    record = await _add(db_session, Album, "x-y")
    assert await allocate_unique(db_session, Album, "X", "Y", exclude_id=record.id) == "x-y"


@pytest.mark.asyncio
async def test_exclusion_still_avoids_other_records(db_session) -> None:
    await _add(db_session, Album, "x-y")
    second = await _add(db_session, Album, "x-y-2")
    assert await allocate_unique(db_session, Album, "X", "Y", exclude_id=second.id) == "x-y-2"
