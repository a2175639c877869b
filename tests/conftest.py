"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from garage.config import get_settings
from garage.database import close_db, get_engine, get_session, init_db
from garage.db import models  # noqa: F401
from garage.db.base import Base
from garage.main import create_app
from garage.submissions.rules import AUTO_ACCEPT, get_submission_rules

ADMIN_TOKEN = "test-admin-token"
WALLET = "0x" + "ab" * 32
OTHER_WALLET = "0x" + "cd" * 32
VERCEL_URL = "https://my-garage.vercel.app"
SUISCAN_URL = "https://suiscan.xyz/testnet/tx/0x" + "1f" * 32


@pytest_asyncio.fixture
async def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[str, None]:
    """Fresh SQLite database per test with all tables created."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'garage.db'}"
    monkeypatch.setenv("GARAGE_DATABASE_URL", url)
    monkeypatch.setenv("GARAGE_ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("GARAGE_LOG_FORMAT", "console")
    get_settings.cache_clear()

    await init_db(url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield url

    await close_db()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def app(database: str) -> FastAPI:
    """Application wired to the test database (lifespan is not run)."""
    return create_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client using the default ``review`` ruleset."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auto_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client using the ``auto_accept`` ruleset."""
    app.dependency_overrides[get_submission_rules] = lambda: AUTO_ACCEPT
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def db_session(database: str) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for arranging and asserting rows."""
    sessions = get_session()
    session = await sessions.__anext__()
    yield session
    await sessions.aclose()


def submission_payload(**overrides: object) -> dict[str, object]:
    """A valid submission body for both rulesets."""
    payload: dict[str, object] = {
        "wallet_address": WALLET,
        "chapter_id": 1,
        "vercel_url": VERCEL_URL,
        "suiscan_url": SUISCAN_URL,
    }
    payload.update(overrides)
    return payload
