"""Middleware that forces first-run setup before anything else is served."""
from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from ditchfork.db.session import get_session
from ditchfork.services.users import users_exist

SETUP_PATH = "/setup"
_OPEN_PREFIXES = ("/static/", SETUP_PATH)


class SetupGuardMiddleware(BaseHTTPMiddleware):
    """Redirect every request to ``/setup`` until an admin user exists."""

    async def dispatch(self, request: Request, call_next):
        state = request.app.state
        # Users are never deleted, so once one exists the check can stop.
        if getattr(state, "has_users", False) or request.url.path.startswith(_OPEN_PREFIXES):
            return await call_next(request)

        async with get_session() as session:
            state.has_users = await users_exist(session)

        if not state.has_users:
            return RedirectResponse(url=SETUP_PATH, status_code=303)
        return await call_next(request)
