"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="DITCHFORK_",
        extra="ignore",
    )

    app_name: str = "Ditchfork"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./ditchfork.db"

    # Uploads
    upload_dir: str = "./uploads"
    max_upload_bytes: int = 5 << 20
    max_request_bytes: int = 10 << 20

    # Sessions
    session_cookie_name: str = "ditchfork_session"
    session_cookie_path: str = "/admin"
    session_cookie_secure: bool = True
    session_ttl_hours: int = 24

    # Password hashing (argon2 time cost)
    password_hash_rounds: int = 3

    # Login throttling
    login_backoff_threshold: int = 3
    login_backoff_max_exponent: int = 9
    login_attempt_ttl_minutes: int = 30
    login_sweep_interval_minutes: int = 30

    # Scheduler
    scheduler_enabled: bool = True
    session_sweep_interval_minutes: int = 60

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
