from __future__ import annotations
import os
import tempfile

# Settings are read at import time; point them at a throwaway SQLite file first.
_tmp = tempfile.mkdtemp(prefix="commissiestrijd-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_tmp}/test.db")
os.environ.setdefault("IMAGE_DIR", os.path.join(_tmp, "images"))
os.environ.setdefault("SWEEPER_ENABLED", "0")
os.environ.setdefault("TIMEZONE", "Europe/Amsterdam")

from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from commissiestrijd.auth_deps import get_principal
from commissiestrijd.db import Base, SessionLocal, engine
from commissiestrijd.deps import get_clock, get_image_store
from commissiestrijd.main import app
from commissiestrijd.services.clock import Clock
from commissiestrijd.services.storage import LocalImageStore
from fakes import ADMIN

import commissiestrijd.models.committee  # noqa: F401  (register tables)
import commissiestrijd.models.period  # noqa: F401
import commissiestrijd.models.possible_task  # noqa: F401
import commissiestrijd.models.submitted_task  # noqa: F401

@pytest_asyncio.fixture()
async def db():
    """Fresh schema per test; yields the session factory."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield SessionLocal
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # pooled aiosqlite connections are bound to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture()
async def session(db):
    async with db() as s:
        yield s


@pytest.fixture()
def store(tmp_path: Path) -> LocalImageStore:
    return LocalImageStore(tmp_path / "images")


@pytest.fixture()
def clock() -> Clock:
    return Clock("Europe/Amsterdam")


@pytest.fixture()
def principal():
    """Mutable holder so a test can switch between admin and member mid-way."""
    return {"current": ADMIN}


@pytest_asyncio.fixture()
async def client(db, store, clock, principal):
    app.dependency_overrides[get_principal] = lambda: principal["current"]
    app.dependency_overrides[get_image_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    try:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
