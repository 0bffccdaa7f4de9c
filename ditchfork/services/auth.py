"""Credential verification and server-side session lifecycle."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.config import get_settings
from ditchfork.core.errors import InvalidCredentials, RateLimited, StoreUnavailable
from ditchfork.core.rate_limit import LoginLimiter
from ditchfork.core.security import PasswordHasher, generate_session_token
from ditchfork.db.base import utcnow
from ditchfork.models.session import SessionRecord
from ditchfork.models.user import User
from ditchfork.services.users import get_user_by_username

logger = logging.getLogger(__name__)


async def authenticate(
    session: AsyncSession,
    limiter: LoginLimiter,
    address: str,
    username: str,
    password: str,
) -> User:
    """Verify a login attempt from ``address``.

    Raises ``RateLimited`` without checking the password while the address is
    cooling down. Every rejected password counts as one failure; a success
    clears the address's history.
    """
    wait = limiter.cooldown(address)
    if wait > 0:
        logger.warning("login rate-limited: ip=%s wait=%.1fs", address, wait)
        raise RateLimited(wait)

    try:
        user = await get_user_by_username(session, username)
    except SQLAlchemyError as exc:
        raise StoreUnavailable("user lookup failed") from exc

    if user is None:
        await run_in_threadpool(PasswordHasher.verify_dummy, password)
        limiter.record_failure(address)
        logger.info("login failed: ip=%s user=%r (not found)", address, username)
        raise InvalidCredentials()

    if not await run_in_threadpool(PasswordHasher.verify, password, user.password_hash):
        limiter.record_failure(address)
        logger.info("login failed: ip=%s user=%r (bad password)", address, username)
        raise InvalidCredentials()

    limiter.reset(address)
    logger.info("login success: ip=%s user=%r", address, username)
    return user


async def create_session(session: AsyncSession, user: User, now: datetime | None = None) -> SessionRecord:
    settings = get_settings()
    now = now or utcnow()
    record = SessionRecord(
        token=generate_session_token(),
        user_id=user.id,
        expires_at=now + timedelta(hours=settings.session_ttl_hours),
    )
    session.add(record)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreUnavailable("could not persist session") from exc
    return record


async def get_active_session(
    session: AsyncSession, token: str, now: datetime | None = None
) -> SessionRecord | None:
    """Return the session for ``token`` if it has not expired.

    An expired record is deleted on sight.
    """
    now = now or utcnow()
    try:
        record = await session.get(SessionRecord, token)
        if record is None:
            return None
        if record.is_expired(now):
            await session.delete(record)
            await session.commit()
            return None
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreUnavailable("session lookup failed") from exc
    return record


async def logout(session: AsyncSession, token: str | None) -> None:
    """Delete the session for ``token``. Unknown or missing tokens are ignored."""
    if not token:
        return
    try:
        await session.execute(delete(SessionRecord).where(SessionRecord.token == token))
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreUnavailable("could not delete session") from exc


async def purge_expired_sessions(session: AsyncSession, now: datetime | None = None) -> int:
    now = now or utcnow()
    result = await session.execute(delete(SessionRecord).where(SessionRecord.expires_at <= now))
    await session.commit()
    return result.rowcount or 0
