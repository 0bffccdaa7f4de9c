"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.config import get_settings
from ditchfork.core.errors import SessionExpiredOrInvalid
from ditchfork.core.rate_limit import LoginLimiter
from ditchfork.db.session import get_session
from ditchfork.models.review import CONTENT_TYPES, ContentType
from ditchfork.models.user import User
from ditchfork.services.auth import get_active_session
from ditchfork.services.users import get_user


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


def get_login_limiter(request: Request) -> LoginLimiter:
    return request.app.state.login_limiter


def client_ip(request: Request) -> str:
    """Best-effort client address; the forwarded header is trivially spoofed."""
    forwarded = request.headers.get("X-Forwarded-For", "").split(",", 1)[0].strip()
    if forwarded:
        return forwarded
    if request.client is None:
        return "unknown"
    host = request.client.host
    # Bracketed IPv6 or host:port; bare IPv6 addresses keep their colons.
    if host.startswith("["):
        return host[1:].split("]", 1)[0]
    if host.count(":") == 1:
        return host.rsplit(":", 1)[0]
    return host


async def require_session(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> User:
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise SessionExpiredOrInvalid()

    record = await get_active_session(session, token)
    if record is None:
        raise SessionExpiredOrInvalid()

    user = await get_user(session, record.user_id)
    if user is None:
        raise SessionExpiredOrInvalid()
    return user


def get_content_type(category: str) -> ContentType:
    content_type = CONTENT_TYPES.get(category)
    if content_type is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return content_type
