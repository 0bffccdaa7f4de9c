"""Public reading pages."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.dependencies import get_db
from ditchfork.core.templating import render
from ditchfork.models.review import CONTENT_TYPE_LIST, CONTENT_TYPES, URL_PATH_TO_CONTENT_TYPE
from ditchfork.services import reviews as review_service

router = APIRouter(tags=["public"])


@router.get("/")
async def home(request: Request, tab: str = "all", session: AsyncSession = Depends(get_db)):
    if tab in ("", "all"):
        tab = "all"
        items = await review_service.list_feed(session)
        section_title = "Feed"
    else:
        content_type = CONTENT_TYPES.get(tab)
        if content_type is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        items = await review_service.list_category(session, content_type)
        section_title = content_type.plural

    return await render(
        request,
        session,
        "home.html",
        {
            "reviews": items,
            "active_tab": tab,
            "section_title": section_title,
            "content_types": CONTENT_TYPE_LIST,
        },
    )


@router.get("/music/{category}/{slug}")
async def review_page(request: Request, category: str, slug: str, session: AsyncSession = Depends(get_db)):
    content_type = URL_PATH_TO_CONTENT_TYPE.get(category)
    if content_type is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    review = await review_service.get_by_slug(session, content_type, slug)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    return await render(
        request,
        session,
        "review.html",
        {"review": review, "content_type": content_type},
    )
