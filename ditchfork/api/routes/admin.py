"""Admin CRUD endpoints for reviews, articles and site settings."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.config import get_settings
from ditchfork.core.dependencies import get_content_type, get_db, require_session
from ditchfork.core.templating import render
from ditchfork.models.review import ARTICLE_TYPES, CONTENT_TYPE_LIST, CONTENT_TYPES, ContentType
from ditchfork.models.user import User
from ditchfork.schemas.review import ReviewForm
from ditchfork.schemas.setting import SiteSettingsUpdate
from ditchfork.services import reviews as review_service
from ditchfork.services import site_settings
from ditchfork.services.uploads import discard_cover, save_cover

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_session)])

DASHBOARD_PATH = "/admin/"


def _redirect_to_dashboard() -> RedirectResponse:
    return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)


def _form_context(**extra: Any) -> dict[str, Any]:
    context = {"content_types": CONTENT_TYPE_LIST, "article_types": ARTICLE_TYPES}
    context.update(extra)
    return context


async def _lookup(session: AsyncSession, content_type: ContentType, review_id: int):
    review = await review_service.get_by_id(session, content_type, review_id)
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return review


@router.get("/")
async def dashboard(
    request: Request,
    session: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_session),
):
    items = await review_service.list_feed(session)
    return await render(
        request,
        session,
        "admin/dashboard.html",
        {"reviews": items, "content_types": CONTENT_TYPE_LIST, "user": current_user},
    )


@router.get("/reviews/new")
async def new_review_form(
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    return await render(request, session, "admin/form.html", _form_context(is_new=True, is_article=False, form={}))


@router.post("/reviews")
async def create_review(
    request: Request,
    category: str = Form("", alias="type"),
    artist: str = Form(""),
    title: str = Form(""),
    subheader: str = Form(""),
    rating: str = Form(""),
    body: str = Form(""),
    article_type: str = Form(""),
    cover: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_db),
):
    content_type = CONTENT_TYPES.get(category)
    if content_type is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid review type")

    form = ReviewForm.from_form(
        artist=artist, title=title, subheader=subheader, rating=rating, body=body, article_type=article_type
    )
    settings = get_settings()
    try:
        data = review_service.validate_review(content_type, form)
        cover_path = await save_cover(cover, settings.upload_dir, settings.max_upload_bytes)
    except ValueError as exc:
        context = _form_context(
            is_new=True,
            is_article=content_type.is_article,
            error=str(exc),
            form={"type": category, **form.model_dump()},
        )
        return await render(request, session, "admin/form.html", context, status.HTTP_400_BAD_REQUEST)

    try:
        await review_service.create_review(session, content_type, data, cover_path)
        await session.commit()
    except SQLAlchemyError:
        discard_cover(settings.upload_dir, cover_path)
        raise
    return _redirect_to_dashboard()


@router.get("/settings")
async def settings_form(
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    return await render(request, session, "admin/settings.html")


@router.post("/settings")
async def save_settings(
    request: Request,
    site_title: str = Form(""),
    nav_bg_color: str = Form(""),
    page_bg_color: str = Form(""),
    accent_color: str = Form(""),
    session: AsyncSession = Depends(get_db),
):
    try:
        update = SiteSettingsUpdate(
            site_title=site_title,
            nav_bg_color=nav_bg_color,
            page_bg_color=page_bg_color,
            accent_color=accent_color,
        )
    except ValidationError as exc:
        message = "; ".join(error["msg"].removeprefix("Value error, ") for error in exc.errors())
        return await render(
            request, session, "admin/settings.html", {"error": message}, status.HTTP_400_BAD_REQUEST
        )

    await site_settings.update_many(session, update.changes())
    await session.commit()
    return await render(request, session, "admin/settings.html", {"success": "Settings saved successfully."})


@router.get("/{category}/{review_id}/edit")
async def edit_review_form(
    request: Request,
    review_id: int,
    content_type: ContentType = Depends(get_content_type),
    session: AsyncSession = Depends(get_db),
):
    review = await _lookup(session, content_type, review_id)
    context = _form_context(
        is_new=False,
        is_article=content_type.is_article,
        review=review,
        content_type=content_type,
        form=_review_as_form(review),
    )
    return await render(request, session, "admin/form.html", context)


@router.post("/{category}/{review_id}")
async def update_review(
    request: Request,
    review_id: int,
    artist: str = Form(""),
    title: str = Form(""),
    subheader: str = Form(""),
    rating: str = Form(""),
    body: str = Form(""),
    article_type: str = Form(""),
    cover: UploadFile | None = File(None),
    content_type: ContentType = Depends(get_content_type),
    session: AsyncSession = Depends(get_db),
):
    review = await _lookup(session, content_type, review_id)
    form = ReviewForm.from_form(
        artist=artist, title=title, subheader=subheader, rating=rating, body=body, article_type=article_type
    )
    settings = get_settings()
    try:
        data = review_service.validate_review(content_type, form)
        cover_path = await save_cover(cover, settings.upload_dir, settings.max_upload_bytes)
    except ValueError as exc:
        context = _form_context(
            is_new=False,
            is_article=content_type.is_article,
            error=str(exc),
            review=review,
            content_type=content_type,
            form=_review_as_form(review),
        )
        return await render(request, session, "admin/form.html", context, status.HTTP_400_BAD_REQUEST)

    try:
        await review_service.update_review(session, review, data, cover_path)
        await session.commit()
    except SQLAlchemyError:
        discard_cover(settings.upload_dir, cover_path)
        raise
    return _redirect_to_dashboard()


@router.post("/{category}/{review_id}/delete")
async def delete_review(
    review_id: int,
    content_type: ContentType = Depends(get_content_type),
    session: AsyncSession = Depends(get_db),
):
    review = await _lookup(session, content_type, review_id)
    await review_service.delete_review(session, review)
    await session.commit()
    return _redirect_to_dashboard()


def _review_as_form(review) -> dict[str, Any]:
    return {
        "type": review.category,
        "artist": review.artist,
        "title": review.title,
        "subheader": review.subheader,
        "rating": f"{review.rating:g}",
        "body": review.body,
        "article_type": review.article_type,
    }
