"""Key/value site settings with built-in defaults."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ditchfork.models.setting import SETTING_DEFAULTS, SiteSetting


async def get_all(session: AsyncSession) -> dict[str, str]:
    settings = dict(SETTING_DEFAULTS)
    result = await session.execute(select(SiteSetting))
    settings.update({row.key: row.value for row in result.scalars()})
    return settings


async def update(session: AsyncSession, key: str, value: str) -> None:
    if key not in SETTING_DEFAULTS:
        raise ValueError(f"Unknown setting: {key}")
    stmt = sqlite_insert(SiteSetting).values(key=key, value=value)
    stmt = stmt.on_conflict_do_update(index_elements=[SiteSetting.key], set_={"value": value})
    await session.execute(stmt)


async def update_many(session: AsyncSession, changes: dict[str, str]) -> None:
    for key, value in changes.items():
        await update(session, key, value)


async def seed_defaults(session: AsyncSession) -> None:
    """Populate the defaults once, on a fresh database."""
    count = (await session.execute(select(func.count()).select_from(SiteSetting))).scalar_one()
    if count:
        return
    session.add_all(SiteSetting(key=key, value=value) for key, value in SETTING_DEFAULTS.items())
    await session.flush()
