"""Jinja2 environment and the page rendering helper."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.models.review import CONTENT_TYPES
from ditchfork.services import site_settings

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def type_label(category: str) -> str:
    content_type = CONTENT_TYPES.get(category)
    return content_type.singular if content_type else category


def type_path(category: str) -> str:
    content_type = CONTENT_TYPES.get(category)
    return content_type.url_path if content_type else category


def max_rating(category: str) -> float:
    content_type = CONTENT_TYPES.get(category)
    return content_type.max_rating if content_type else 10.0


def fmt_rating(rating: float) -> str:
    return f"{rating:.1f}"


def rating_class(rating: float, category: str) -> str:
    """Highlight scores at or above 80% of the category maximum."""
    top = max_rating(category)
    if top == 0:
        return ""
    return "rating-high" if rating / top * 100 >= 80 else ""


templates.env.filters["type_label"] = type_label
templates.env.filters["type_path"] = type_path
templates.env.filters["fmt_rating"] = fmt_rating
templates.env.globals["max_rating"] = max_rating
templates.env.globals["rating_class"] = rating_class


async def render(
    request: Request,
    session: AsyncSession,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
):
    context = dict(context or {})
    context.setdefault("year", datetime.now().year)
    if "settings" not in context:
        context["settings"] = await site_settings.get_all(session)
    return templates.TemplateResponse(request, name, context, status_code=status_code)
