"""Schemas for the site settings form."""
from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class SiteSettingsUpdate(BaseModel):
    """Blank fields leave the stored value untouched."""

    site_title: str = ""
    nav_bg_color: str = ""
    page_bg_color: str = ""
    accent_color: str = ""

    @field_validator("site_title", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        return (value or "").strip()

    @field_validator("nav_bg_color", "page_bg_color", "accent_color", mode="before")
    @classmethod
    def _check_color(cls, value: str) -> str:
        value = (value or "").strip()
        if value and not _HEX_COLOR.match(value):
            raise ValueError(f"{value!r} is not a #rrggbb colour")
        return value.lower()

    def changes(self) -> dict[str, str]:
        return {key: value for key, value in self.model_dump().items() if value}
