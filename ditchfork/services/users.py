"""User service functions for account creation and lookup."""
from __future__ import annotations

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.core.security import PasswordHasher
from ditchfork.models.user import User
from ditchfork.schemas.user import UserCreate


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    """Exact, case-sensitive lookup."""
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    return await session.get(User, user_id)


async def create_user(session: AsyncSession, user_in: UserCreate) -> User:
    existing = await get_user_by_username(session, user_in.username)
    if existing:
        raise ValueError("Username already taken")
    password_hash = await run_in_threadpool(PasswordHasher.hash, user_in.password)
    user = User(username=user_in.username, password_hash=password_hash)
    session.add(user)
    await session.flush()
    return user


async def users_exist(session: AsyncSession) -> bool:
    result = await session.execute(select(User.id).limit(1))
    return result.first() is not None
