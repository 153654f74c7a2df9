"""Pytest configuration and fixtures.

The environment is pointed at a throwaway directory before the application
is imported, so the database, uploads and logs never touch ./data.
"""

import os
import shutil
import tempfile
from pathlib import Path

TEST_ROOT = Path(tempfile.mkdtemp(prefix="gamecfg-tests-"))
os.environ["DATA_DIR"] = str(TEST_ROOT / "data")
os.environ["LOGS_DIR"] = str(TEST_ROOT / "data" / "logs")
os.environ["PUBLIC_DIR"] = str(TEST_ROOT / "public")
os.environ["UPLOADS_DIR"] = str(TEST_ROOT / "public" / "uploads")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_ROOT / 'data' / 'test.db'}"

import httpx  # noqa: E402
import pytest  # noqa: E402

from gamecfg import models  # noqa: E402,F401
from gamecfg.config import settings  # noqa: E402
from gamecfg.database import AsyncSessionLocal, Base, engine  # noqa: E402
from gamecfg.main import app  # noqa: E402


@pytest.fixture(autouse=True)
async def fresh_database():
    """Empty schema and uploads directory for every test."""
    shutil.rmtree(settings.UPLOADS_DIR, ignore_errors=True)
    settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    app.dependency_overrides.clear()
    # Pooled connections must not outlive the test's event loop
    await engine.dispose()


@pytest.fixture
async def db():
    """Async session for service-level tests."""
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    """HTTP client driving the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(TEST_ROOT, ignore_errors=True)
