"""Test fixtures — an isolated in-memory database per test.

Learn: Each test gets a fresh app built by create_app() against
sqlite+aiosqlite:// (a static pool keeps the in-memory database alive
across sessions). httpx's ASGITransport doesn't run the lifespan, so the
fixture creates the tables itself.

Two clients mirror the two auth modes:
- `client` overrides get_current_user so protected routes just work
- `unauthenticated_client` runs the real cookie/JWT pipeline
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pulseboard.auth.dependencies import get_current_user
from pulseboard.auth.jwt import SessionIdentity
from pulseboard.config import settings
from pulseboard.db.engine import init_models
from pulseboard.main import create_app

TEST_DB_URL = "sqlite+aiosqlite://"

TEST_IDENTITY = SessionIdentity(
    user_id="00000000-0000-0000-0000-000000000001",
    name="Test User",
    email="test@example.com",
)


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt's minimum work factor keeps auth tests quick."""
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest_asyncio.fixture()
async def app():
    app = create_app(database_url=TEST_DB_URL)
    await init_models(app.state.engine)
    try:
        yield app
    finally:
        app.dependency_overrides.clear()
        await app.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client with auth overridden to a fixed test identity."""
    app.dependency_overrides[get_current_user] = lambda: TEST_IDENTITY

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture()
async def unauthenticated_client(app):
    """HTTP client WITHOUT auth override — for testing real cookie flows."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def broadcaster(app):
    return app.state.broadcaster
