import os
import uuid

# Settings are chosen at import time; tests always run against TestSettings
os.environ.setdefault("MODE", "test")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are imported
from config import settings
from config.database import to_sync_url
from db_base import Base
from db_models.user import User
from core.security import get_password_hash, create_access_token, session_claims

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or settings.DATABASE_URL

sync_url = to_sync_url(TEST_DATABASE_URL)

ANA_EMAIL = "ana@test.com"
BOB_EMAIL = "bob@test.com"
TEST_PASSWORD = "Password1"

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Create/drop tables for tests (Destructive - use a dedicated test DB)
    sync_engine = create_engine(sync_url)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()


@pytest.fixture
def session_factory():
    """The sessionmaker bound to the test database."""
    return AsyncSessionTest


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="session")
def seed_users(prepare_db):
    """Two accounts, Ana and Bob, shared by the whole test session."""
    sync_engine = create_engine(sync_url)
    Session = sessionmaker(bind=sync_engine, expire_on_commit=False)

    with Session() as session:
        ana = User(name="Ana", email=ANA_EMAIL, hashed_password=get_password_hash(TEST_PASSWORD))
        bob = User(name="Bob", email=BOB_EMAIL, hashed_password=get_password_hash(TEST_PASSWORD))
        session.add_all([ana, bob])
        session.commit()

    sync_engine.dispose()
    return {"ana": ana, "bob": bob}


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


@pytest.fixture(scope="session")
def ana_headers(seed_users):
    """Authorization headers for Ana."""
    token = create_access_token(session_claims(seed_users["ana"]))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def bob_headers(seed_users):
    """Authorization headers for Bob."""
    token = create_access_token(session_claims(seed_users["bob"]))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(async_client):
    """
    Register a fresh account through the API and return its headers.

    For tests that need a user with no data left over from other tests.
    """
    async def _register(name: str = "Fresh User") -> dict:
        email = f"user-{uuid.uuid4().hex[:12]}@test.com"
        resp = await async_client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": TEST_PASSWORD},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return {
            "id": data["user"]["id"],
            "email": email,
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    return _register


@pytest.fixture
def create_asset(async_client):
    """Create an asset for the given headers and return its JSON."""
    async def _create(headers: dict, name: str = "Forklift", description: str | None = None) -> dict:
        resp = await async_client.post(
            "/api/v1/ativos",
            json={"name": name, "description": description},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_maintenance(async_client):
    """Log a maintenance record on an asset and return its JSON."""
    async def _create(headers: dict, asset_id: int, **fields) -> dict:
        fields.setdefault("service", "Oil change")
        resp = await async_client.post(
            f"/api/v1/ativos/{asset_id}/manutencoes",
            json=fields,
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
