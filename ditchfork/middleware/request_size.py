"""Middleware rejecting oversized admin uploads before the body is parsed."""
from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Answer 400 when the declared body size exceeds ``max_bytes``."""

    def __init__(self, app, max_bytes: int, path_prefix: str = "/admin"):
        super().__init__(app)
        self.max_bytes = max_bytes
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST" and request.url.path.startswith(self.path_prefix):
            length = request.headers.get("content-length", "")
            if length.isdigit() and int(length) > self.max_bytes:
                return PlainTextResponse("Request too large", status_code=400)
        return await call_next(request)
