"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from ditchfork.api import site_router
from ditchfork.core.config import get_settings
from ditchfork.core.errors import SessionExpiredOrInvalid, StoreUnavailable
from ditchfork.core.rate_limit import LoginLimiter
from ditchfork.db.session import init_db
from ditchfork.middleware import RequestSizeLimitMiddleware, SetupGuardMiddleware
from ditchfork.services.scheduler import (
    create_scheduler,
    schedule_login_sweep,
    schedule_session_sweep,
    start_scheduler,
    stop_scheduler,
)

logger = logging.getLogger(__name__)

settings = get_settings()

STATIC_DIR = Path(__file__).resolve().parent / "static"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    app.state.has_users = False

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = create_scheduler()
        schedule_login_sweep(scheduler, app.state.login_limiter)
        schedule_session_sweep(scheduler)
        start_scheduler(scheduler)

    logger.info("%s ready", settings.app_name)
    try:
        yield
    finally:
        if scheduler is not None:
            stop_scheduler(scheduler)


configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name, lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
app.state.login_limiter = LoginLimiter(
    threshold=settings.login_backoff_threshold,
    max_exponent=settings.login_backoff_max_exponent,
    ttl_seconds=settings.login_attempt_ttl_minutes * 60,
)

# Last added runs first: size check, then the setup guard.
app.add_middleware(SetupGuardMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_bytes)


@app.exception_handler(SessionExpiredOrInvalid)
async def _redirect_to_login(_: Request, __: SessionExpiredOrInvalid) -> RedirectResponse:
    return RedirectResponse("/admin/login", status_code=303)


@app.exception_handler(StoreUnavailable)
@app.exception_handler(SQLAlchemyError)
async def _store_failure(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error("Persistence failure on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Internal server error", status_code=500)


app.include_router(site_router)

upload_dir = Path(settings.upload_dir)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")
