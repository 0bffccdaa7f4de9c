"""Schemas for the review/article admin form."""
from __future__ import annotations

from pydantic import BaseModel


class ReviewForm(BaseModel):
    """Raw values submitted by the admin form, trimmed but not yet validated."""

    artist: str = ""
    title: str = ""
    subheader: str = ""
    rating: str = ""
    body: str = ""
    article_type: str = ""

    @classmethod
    def from_form(
        cls,
        *,
        artist: str = "",
        title: str = "",
        subheader: str = "",
        rating: str = "",
        body: str = "",
        article_type: str = "",
    ) -> "ReviewForm":
        return cls(
            artist=artist.strip(),
            title=title.strip(),
            subheader=subheader.strip(),
            rating=rating.strip(),
            body=body,
            article_type=article_type,
        )

    @property
    def rating_value(self) -> float:
        """Unparseable ratings count as zero."""
        try:
            return float(self.rating) if self.rating else 0.0
        except ValueError:
            return 0.0


class ReviewData(BaseModel):
    """Validated values ready to be written to a content table."""

    artist: str
    title: str
    subheader: str
    rating: float
    body: str
    article_type: str
