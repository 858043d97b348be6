"""
Pytest fixtures for the dashboard test suite.

Provides:
- A temporary SQLite database (aiosqlite) seeded from the shipped fixtures
- An httpx client wired to the FastAPI app, anonymous or signed in

DATABASE_URL is pointed at the temporary database before any dashboard
module is imported, so the module-level engine picks it up.
"""

import os
import tempfile
from types import SimpleNamespace

_DB_DIR = tempfile.mkdtemp(prefix="dashboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["DEMO_FETCH_DELAY"] = "0"

import httpx  # noqa: E402
import pytest  # noqa: E402

from dashboard.database import Base, engine  # noqa: E402
from dashboard.seed import seed  # noqa: E402

# Fixture ids used across tests
DELBA_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
STEVEN_ID = "50ca3e18-62cd-11ee-8c99-0242ac120002"
DELBA_PENDING_INVOICE_ID = "a1f0c3d2-1b4e-4c6a-9f21-0d3e5b7a9c01"
STEVEN_PAID_INVOICE_ID = "a1f0c3d2-1b4e-4c6a-9f21-0d3e5b7a9c04"
UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


@pytest.fixture
async def db():
    await seed()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(db):
    from dashboard.app import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def signed_in(client):
    response = await client.post("/login", data={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert response.status_code == 303
    return client


@pytest.fixture
def fake_request():
    """Just enough of a Request for sign-in: a mutable session."""
    return SimpleNamespace(session={})
