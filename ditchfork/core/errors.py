"""Exceptions raised by the authentication core."""
from __future__ import annotations

import math


class DitchforkError(Exception):
    """Base class for application errors."""


class InvalidCredentials(DitchforkError):
    """Unknown username or wrong password. Both cases share one message."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class RateLimited(DitchforkError):
    """Login refused while the client address is cooling down."""

    def __init__(self, wait_seconds: float) -> None:
        self.wait_seconds = wait_seconds
        super().__init__(f"Too many attempts. Try again in {self.whole_seconds}s.")

    @property
    def whole_seconds(self) -> int:
        return max(1, math.ceil(self.wait_seconds))


class SessionExpiredOrInvalid(DitchforkError):
    """No usable session cookie; the client is sent back to the login page."""


class StoreUnavailable(DitchforkError):
    """A persistence operation failed; the request is aborted."""
