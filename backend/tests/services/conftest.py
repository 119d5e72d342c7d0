"""Service test fixtures — async DB, stores, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness check sees the test engine
    - Helper fixtures register users and log them in through the public API

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks are no-ops there; race handling is covered by the store tests)
    - bcrypt cost comes from BCRYPT_ROUNDS=4 set in the root conftest
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from socialgraph.db.base import Base
from socialgraph.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
import socialgraph.infrastructure.database as db_module
import socialgraph.models  # noqa: F401
from socialgraph.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register(client):
    """POST /users with sensible defaults; returns the response JSON."""
    async def _register(handle: str, password: str = "secret1", **overrides):
        payload = {
            "name": handle.capitalize(),
            "handle": handle,
            "email": f"{handle}@example.com",
            "password": password,
        }
        payload.update(overrides)
        response = await client.post("/api/v1/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def login(client):
    """POST /login; returns Authorization headers for the user."""
    async def _login(email: str, password: str = "secret1"):
        response = await client.post(
            "/api/v1/login", json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def signup(register, login):
    """Register + log in; returns (user_json, auth_headers)."""
    async def _signup(handle: str, password: str = "secret1"):
        user = await register(handle, password)
        headers = await login(user["email"], password)
        return user, headers
    return _signup
