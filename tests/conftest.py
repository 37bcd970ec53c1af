"""Shared test fixtures."""

import os

# Must be set before spec_manager.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///")

import pytest
from httpx import ASGITransport, AsyncClient

from spec_manager.db.base import Base
from spec_manager.db.engine import create_db_engine, create_session_factory
# Import all models to register with Base.metadata
import spec_manager.db.models  # noqa: F401

ADMIN = {"email": "admin@example.com", "password": "Admin123!"}
CREATOR = {"email": "creator@example.com", "password": "Creator123!"}


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine, seeded like the app lifespan does."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    from spec_manager.services.seed import seed_database

    async with create_session_factory(engine)() as seed_session:
        await seed_database(seed_session)
        await seed_session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    async with create_session_factory(db_engine)() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from spec_manager.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = create_session_factory(db_engine)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _login(client, credentials: dict) -> dict:
    response = await client.post("/api/auth/login", json=credentials)
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
async def admin_login(client):
    return await _login(client, ADMIN)


@pytest.fixture
async def creator_login(client):
    return await _login(client, CREATOR)


@pytest.fixture
def admin_headers(admin_login):
    return {"Authorization": f"Bearer {admin_login['token']}"}


@pytest.fixture
def creator_headers(creator_login):
    return {"Authorization": f"Bearer {creator_login['token']}"}


@pytest.fixture
def default_schema_id():
    from spec_manager.config import settings

    return settings.default_schema_id
