"""Shared fixtures: a throwaway SQLite file per test and a configured app."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="ditchfork-tests-"))
DB_PATH = _TMP_DIR / "test.db"
UPLOAD_DIR = _TMP_DIR / "uploads"

# Must be set before anything imports ditchfork.core.config.
os.environ["DITCHFORK_DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["DITCHFORK_UPLOAD_DIR"] = str(UPLOAD_DIR)
os.environ["DITCHFORK_SCHEDULER_ENABLED"] = "false"
os.environ["DITCHFORK_SESSION_COOKIE_SECURE"] = "false"
os.environ["DITCHFORK_PASSWORD_HASH_ROUNDS"] = "1"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ditchfork.core.rate_limit import LoginLimiter  # noqa: E402
from ditchfork.db.session import get_session, init_db  # noqa: E402

ADMIN_USERNAME = "alice"
ADMIN_PASSWORD = "correct-horse"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def fresh_database():
    for suffix in ("", "-wal", "-shm"):
        Path(f"{DB_PATH}{suffix}").unlink(missing_ok=True)
    yield


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture()
async def db_session():
    await init_db()
    async with get_session() as session:
        yield session


@pytest.fixture()
def client():
    from ditchfork.main import app

    app.state.login_limiter = LoginLimiter()
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture()
def admin_client(client: TestClient) -> TestClient:
    """A client that has completed setup and holds a valid session cookie."""
    response = client.post("/setup", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 303
    response = client.post("/admin/login", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 303
    return client
