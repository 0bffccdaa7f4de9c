"""Login and logout endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.config import get_settings
from ditchfork.core.dependencies import client_ip, get_db, get_login_limiter
from ditchfork.core.errors import InvalidCredentials, RateLimited
from ditchfork.core.rate_limit import LoginLimiter
from ditchfork.core.templating import render
from ditchfork.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["auth"])

LOGIN_PATH = "/admin/login"


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        path=settings.session_cookie_path,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
        max_age=settings.session_ttl_seconds,
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=settings.session_cookie_path,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


@router.get("/login")
async def login_form(request: Request, session: AsyncSession = Depends(get_db)):
    return await render(request, session, "admin/login.html")


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    session: AsyncSession = Depends(get_db),
    limiter: LoginLimiter = Depends(get_login_limiter),
):
    address = client_ip(request)
    try:
        user = await auth_service.authenticate(session, limiter, address, username, password)
    except RateLimited as exc:
        context = {"error": str(exc), "username": username}
        return await render(request, session, "admin/login.html", context, status.HTTP_429_TOO_MANY_REQUESTS)
    except InvalidCredentials as exc:
        context = {"error": str(exc), "username": username}
        return await render(request, session, "admin/login.html", context, status.HTTP_401_UNAUTHORIZED)

    record = await auth_service.create_session(session, user)
    response = RedirectResponse("/admin/", status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, record.token)
    return response


@router.post("/logout")
async def logout(request: Request, session: AsyncSession = Depends(get_db)):
    settings = get_settings()
    await auth_service.logout(session, request.cookies.get(settings.session_cookie_name))
    logger.info("logout: ip=%s", client_ip(request))
    response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    return response
