"""HTTP middleware."""
from .request_size import RequestSizeLimitMiddleware
from .setup_guard import SetupGuardMiddleware

__all__ = ["RequestSizeLimitMiddleware", "SetupGuardMiddleware"]
