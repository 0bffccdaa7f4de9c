"""Background scheduler for periodic cleanup jobs."""
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError

from ditchfork.core.config import get_settings
from ditchfork.core.rate_limit import LoginLimiter
from ditchfork.db.session import get_session
from ditchfork.services.auth import purge_expired_sessions

logger = logging.getLogger(__name__)

LOGIN_SWEEP_JOB_ID = "sweep-login-attempts"
SESSION_SWEEP_JOB_ID = "purge-expired-sessions"


def create_scheduler() -> AsyncIOScheduler:
    return AsyncIOScheduler()


def start_scheduler(scheduler: AsyncIOScheduler) -> None:
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def stop_scheduler(scheduler: AsyncIOScheduler) -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


def schedule_login_sweep(scheduler: AsyncIOScheduler, limiter: LoginLimiter) -> None:
    settings = get_settings()
    trigger = IntervalTrigger(minutes=settings.login_sweep_interval_minutes)
    scheduler.add_job(
        _sweep_login_attempts, trigger=trigger, id=LOGIN_SWEEP_JOB_ID, args=[limiter], replace_existing=True
    )
    logger.info("Scheduled login attempt sweep every %d minutes", settings.login_sweep_interval_minutes)


def schedule_session_sweep(scheduler: AsyncIOScheduler) -> None:
    settings = get_settings()
    trigger = IntervalTrigger(minutes=settings.session_sweep_interval_minutes)
    scheduler.add_job(_purge_expired_sessions, trigger=trigger, id=SESSION_SWEEP_JOB_ID, replace_existing=True)
    logger.info("Scheduled session expiry sweep every %d minutes", settings.session_sweep_interval_minutes)


def _sweep_login_attempts(limiter: LoginLimiter) -> None:
    limiter.sweep()


async def _purge_expired_sessions() -> None:
    try:
        async with get_session() as session:
            removed = await purge_expired_sessions(session)
    except SQLAlchemyError:
        logger.exception("Session cleanup failed")
        return
    if removed:
        logger.info("Purged %d expired session(s)", removed)
