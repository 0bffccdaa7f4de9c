"""First-run setup: create the initial admin account."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.dependencies import get_db
from ditchfork.core.templating import render
from ditchfork.models.setting import SITE_TITLE
from ditchfork.schemas.user import UserCreate
from ditchfork.services import site_settings
from ditchfork.services.users import create_user, users_exist

logger = logging.getLogger(__name__)

router = APIRouter(tags=["setup"])


def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


def _setup_error(exc: ValidationError) -> str:
    fields = {error["loc"][0] for error in exc.errors() if error["loc"]}
    if "username" in fields:
        return "Username is required."
    return "Password must be at least 8 characters."


@router.get("/setup")
async def setup_form(request: Request, session: AsyncSession = Depends(get_db)):
    if await users_exist(session):
        return _redirect_home()
    return await render(request, session, "setup.html")


@router.post("/setup")
async def setup(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    site_title: str = Form(""),
    session: AsyncSession = Depends(get_db),
):
    if await users_exist(session):
        return _redirect_home()

    context = {"username": username, "site_title": site_title}
    try:
        user_in = UserCreate(username=username, password=password)
    except ValidationError as exc:
        context["error"] = _setup_error(exc)
        return await render(request, session, "setup.html", context, status.HTTP_400_BAD_REQUEST)

    try:
        await create_user(session, user_in)
        if site_title.strip():
            await site_settings.update(session, SITE_TITLE, site_title.strip())
        await session.commit()
    except (ValueError, IntegrityError):
        await session.rollback()
        context["error"] = "Could not create user. Username may already exist."
        return await render(request, session, "setup.html", context, status.HTTP_400_BAD_REQUEST)

    logger.info("Initial admin user %r created", user_in.username)
    return RedirectResponse("/admin/login", status_code=status.HTTP_303_SEE_OTHER)
