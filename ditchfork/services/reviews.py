"""Service layer for review and article persistence."""
from __future__ import annotations

import logging
from itertools import chain

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.db.base import as_utc
from ditchfork.models.review import ARTICLE_TYPES, CONTENT_TYPE_LIST, ContentType, Review
from ditchfork.schemas.review import ReviewData, ReviewForm
from ditchfork.services.slugs import allocate_unique

logger = logging.getLogger(__name__)


def validate_review(content_type: ContentType, form: ReviewForm) -> ReviewData:
    """Apply per-category rules; raises ``ValueError`` with a form message."""
    artist = form.artist
    rating = form.rating_value
    article_type = form.article_type

    if content_type.is_article:
        artist = ""
        rating = 0.0
        if article_type and article_type not in ARTICLE_TYPES:
            raise ValueError(f"Article type must be one of: {', '.join(ARTICLE_TYPES)}")
    else:
        article_type = ""
        if not artist:
            raise ValueError("Artist and title are required")

    if not form.title:
        raise ValueError("Title is required")

    if not content_type.is_article and not 0 <= rating <= content_type.max_rating:
        raise ValueError(f"Rating must be between 0 and {content_type.max_rating:.1f}")

    return ReviewData(
        artist=artist,
        title=form.title,
        subheader=form.subheader,
        rating=rating,
        body=form.body,
        article_type=article_type,
    )


async def list_category(session: AsyncSession, content_type: ContentType) -> list[Review]:
    model = content_type.model
    result = await session.execute(select(model).order_by(model.created_at.desc(), model.id.desc()))
    return list(result.scalars().all())


async def list_feed(session: AsyncSession) -> list[Review]:
    """All content across categories, newest first."""
    per_category = [await list_category(session, content_type) for content_type in CONTENT_TYPE_LIST]
    return sorted(chain.from_iterable(per_category), key=lambda review: as_utc(review.created_at), reverse=True)


async def get_by_slug(session: AsyncSession, content_type: ContentType, slug: str) -> Review | None:
    model = content_type.model
    result = await session.execute(select(model).where(model.slug == slug))
    return result.scalar_one_or_none()


async def get_by_id(session: AsyncSession, content_type: ContentType, review_id: int) -> Review | None:
    return await session.get(content_type.model, review_id)


async def create_review(
    session: AsyncSession,
    content_type: ContentType,
    data: ReviewData,
    cover_path: str | None = None,
) -> Review:
    slug = await allocate_unique(session, content_type.model, data.artist, data.title)
    review = content_type.model(slug=slug, cover_path=cover_path or "", **data.model_dump())
    session.add(review)
    await session.flush()
    logger.info("Created %s %s (id=%s)", content_type.singular.lower(), slug, review.id)
    return review


async def update_review(
    session: AsyncSession,
    review: Review,
    data: ReviewData,
    cover_path: str | None = None,
) -> Review:
    """Overwrite ``review`` and recompute its slug. Keeps the cover unless a new one is given."""
    review.slug = await allocate_unique(session, type(review), data.artist, data.title, exclude_id=review.id)
    for field, value in data.model_dump().items():
        setattr(review, field, value)
    if cover_path:
        review.cover_path = cover_path
    await session.flush()
    return review


async def delete_review(session: AsyncSession, review: Review) -> None:
    await session.delete(review)
    await session.flush()
