"""Security helpers for password hashing and session tokens."""
from __future__ import annotations

import secrets
from functools import lru_cache

from passlib.context import CryptContext

from .config import get_settings

SESSION_TOKEN_BYTES = 32


@lru_cache
def _password_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["argon2"],
        deprecated="auto",
        argon2__rounds=settings.password_hash_rounds,
    )


@lru_cache
def _dummy_hash() -> str:
    return _password_context().hash(secrets.token_hex(16))


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context().hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context().verify(password, hashed)

    @staticmethod
    def verify_dummy(password: str) -> None:
        """Spend the same effort as a real verification for unknown users."""
        _password_context().verify(password, _dummy_hash())


def generate_session_token() -> str:
    """Return a hex-encoded 256-bit random token."""

    return secrets.token_hex(SESSION_TOKEN_BYTES)
