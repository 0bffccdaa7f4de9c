"""Database models for reviews and articles.

Albums, songs and articles live in separate tables with identical columns.
Slugs are unique within a table, not across the site.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ditchfork.db.base import Base, utcnow


class ReviewColumns:
    """Columns shared by every content table."""

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    artist: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subheader: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cover_path: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    article_type: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @property
    def content_type(self) -> "ContentType":
        return CONTENT_TYPES[self.category]


class Album(ReviewColumns, Base):
    __tablename__ = "albums"
    category = "albums"


class Song(ReviewColumns, Base):
    __tablename__ = "songs"
    category = "songs"


class Article(ReviewColumns, Base):
    __tablename__ = "articles"
    category = "articles"


Review = Album | Song | Article


@dataclass(frozen=True)
class ContentType:
    table: str
    singular: str
    plural: str
    url_path: str
    max_rating: float
    model: type[ReviewColumns]

    @property
    def is_article(self) -> bool:
        return self.max_rating == 0


CONTENT_TYPES: dict[str, ContentType] = {
    "albums": ContentType("albums", "Album", "Albums", "albums", 10.0, Album),
    "songs": ContentType("songs", "Song", "Songs", "songs", 10.0, Song),
    "articles": ContentType("articles", "Article", "Articles", "articles", 0.0, Article),
}

# Display order for tabs and the admin form.
CONTENT_TYPE_LIST: list[ContentType] = [CONTENT_TYPES["albums"], CONTENT_TYPES["songs"], CONTENT_TYPES["articles"]]

URL_PATH_TO_CONTENT_TYPE: dict[str, ContentType] = {ct.url_path: ct for ct in CONTENT_TYPE_LIST}

ARTICLE_TYPES: list[str] = ["News", "Opinion", "List"]
