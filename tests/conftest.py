"""Pytest fixtures for print store tests."""

import asyncio
import os
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

# Settings are read at import time, so the environment goes first
_DB_DIR = tempfile.mkdtemp(prefix="printshop-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["SEED_SAMPLE_PRODUCTS"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from printshop.core.database import AsyncSessionLocal, drop_db, init_db  # noqa: E402
from printshop.api.products.services import ProductService  # noqa: E402


async def _reset_db():
    await drop_db()
    await init_db()


@pytest.fixture
async def db():
    """Fresh schema and a session on it."""
    await _reset_db()
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def fresh_session():
    """Factory for extra sessions, to read back what another session committed."""
    sessions = []

    def _open():
        session = AsyncSessionLocal()
        sessions.append(session)
        return session

    yield _open

    for session in sessions:
        await session.close()


@pytest.fixture
def make_product(db):
    """Create a catalog product with sensible defaults."""

    async def _make(name="Cute Dragon", price="8.50", category="Fantasy", **fields):
        data = {
            "name": name,
            "description": f"A printed {name.lower()}",
            "price": Decimal(price),
            "image_url": "/images/test.png",
            "category": category,
            "in_stock": 10,
            "print_time": "2 hours",
            "created_by": "Emma (12)",
        }
        data.update(fields)
        return await ProductService(db).create_product(data)

    return _make


@pytest.fixture
def client():
    """TestClient on an empty store."""
    asyncio.run(_reset_db())

    from printshop.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_headers():
    return {"X-Session-ID": "sess-test-001"}
