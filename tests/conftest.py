import os
import uuid
from pathlib import Path

# Select config.test.TestSettings before anything imports `config`
os.environ["MODE"] = "test"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are imported
from db_base import Base

TEST_DB_PATH = Path(__file__).parent / "test_asset_maintenance.db"
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

# NullPool: every session gets its own connection, closed on release
engine = project_db.build_engine(TEST_DATABASE_URL, poolclass=NullPool)
AsyncSessionTest = project_db.build_sessionmaker(engine)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Schema is built synchronously on the plain sqlite driver
    sync_engine = create_engine(f"sqlite:///{TEST_DB_PATH}")
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


async def register_user(client: AsyncClient, prefix: str = "user", password: str = "Secret123!") -> dict:
    """Register a fresh user and return its id, credentials and auth headers."""
    username = f"{prefix}_{uuid.uuid4().hex[:8]}"
    email = f"{username}@mail.com"
    resp = await client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {
        "id": body["user"]["id"],
        "username": username,
        "email": email,
        "password": password,
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


async def create_asset(client: AsyncClient, headers: dict, name: str = "Car", **extra) -> dict:
    resp = await client.post("/api/assets", json={"name": name, **extra}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["asset"]


async def create_maintenance(client: AsyncClient, headers: dict, asset_id: int, **fields) -> dict:
    payload = {"asset_id": asset_id, "service_description": "Oil change", **fields}
    resp = await client.post("/api/maintenances", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["maintenance"]


@pytest.fixture
async def owner(async_client):
    """A freshly registered user who owns the resources under test."""
    return await register_user(async_client, "owner")


@pytest.fixture
async def intruder(async_client):
    """A second user who must never see the owner's resources."""
    return await register_user(async_client, "intruder")
