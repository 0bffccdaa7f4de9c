"""URL slug generation for reviews and articles."""
from __future__ import annotations

import re

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.models.review import ReviewColumns

_NON_SLUG = re.compile(r"[^a-z0-9-]+")
_MULTI_DASH = re.compile(r"-{2,}")

PLACEHOLDER = "untitled"


def slugify(artist: str, title: str) -> str:
    slug = f"{artist}-{title}".lower()
    slug = _NON_SLUG.sub("-", slug)
    slug = _MULTI_DASH.sub("-", slug)
    return slug.strip("-") or PLACEHOLDER


async def slug_exists(
    session: AsyncSession,
    model: type[ReviewColumns],
    slug: str,
    exclude_id: int | None = None,
) -> bool:
    query = select(func.count()).select_from(model).where(model.slug == slug)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    result = await session.execute(query)
    return result.scalar_one() > 0


async def allocate_unique(
    session: AsyncSession,
    model: type[ReviewColumns],
    artist: str,
    title: str,
    exclude_id: int | None = None,
) -> str:
    """Return the first free slug among ``base``, ``base-2``, ``base-3``...

    Pass ``exclude_id`` when re-slugging an existing record so it does not
    collide with itself. The check and the later insert are not atomic; two
    concurrent writers can pick the same slug and the loser fails on the
    unique index.
    """
    base = slugify(artist, title)
    candidate = base
    suffix = 2
    while await slug_exists(session, model, candidate, exclude_id):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
