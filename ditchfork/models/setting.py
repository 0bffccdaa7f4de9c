"""Key/value site settings."""
from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ditchfork.db.base import Base

SITE_TITLE = "site_title"
NAV_BG_COLOR = "nav_bg_color"
PAGE_BG_COLOR = "page_bg_color"
ACCENT_COLOR = "accent_color"

SETTING_DEFAULTS: dict[str, str] = {
    SITE_TITLE: "Ditchfork",
    NAV_BG_COLOR: "#111111",
    PAGE_BG_COLOR: "#ffffff",
    ACCENT_COLOR: "#d62828",
}

COLOR_KEYS = frozenset({NAV_BG_COLOR, PAGE_BG_COLOR, ACCENT_COLOR})


class SiteSetting(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
