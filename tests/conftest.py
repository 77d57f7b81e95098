"""
Shared test fixtures and configuration for pytest.
"""

import os
import pytest
from datetime import date, datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ADMIN_EMAIL"] = "admin@movian.test"
os.environ["ADMIN_PASSWORD"] = "admin-pass-123"
os.environ["ADMIN_NAME"] = "Movian Team"
os.environ["COOKIE_SECURE"] = "false"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""
os.environ["OMDB_API_KEY"] = "test-omdb-key"
os.environ["YOUTUBE_API_KEY"] = "test-youtube-key"

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db_session
from app.db.models import UserModel
from app.core.auth import create_admin_token, create_user_token, hash_password


# Test database URL (in-memory SQLite for unit tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """Create a mock database session for unit tests."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
async def test_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============ User Fixtures ============

@pytest.fixture
def test_user_data():
    """Test user data."""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicepassword",
        "dob": date(1995, 5, 17),
    }


async def make_user(db_session, **overrides) -> UserModel:
    """Insert a confirmed user directly, bypassing e-mail verification."""
    fields = {
        "username": "bob",
        "email": "bob@example.com",
        "password_hash": hash_password("bobpassword"),
        "dob": date(1990, 1, 1),
        "is_verified": True,
        "is_banned": False,
        "created_at": datetime.now(timezone.utc),
    }
    fields.update(overrides)
    user = UserModel(**fields)
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def test_user(db_session, test_user_data) -> UserModel:
    """Create a test user in the database."""
    return await make_user(
        db_session,
        id="test-user-id-123",
        username=test_user_data["username"],
        email=test_user_data["email"],
        password_hash=hash_password(test_user_data["password"]),
        dob=test_user_data["dob"],
    )


@pytest.fixture
async def other_user(db_session) -> UserModel:
    """A second, unrelated user."""
    return await make_user(db_session, id="other-user-id-456")


@pytest.fixture
def user_factory(db_session):
    """Insert extra users: ``await user_factory(id=..., username=..., email=...)``."""

    async def factory(**overrides) -> UserModel:
        return await make_user(db_session, **overrides)

    return factory


@pytest.fixture
def test_user_token(test_user) -> str:
    """Session token for test user."""
    return create_user_token(test_user.id)


@pytest.fixture
def auth_headers(test_user_token) -> dict:
    """Authorization headers with test user token."""
    return {"Authorization": f"Bearer {test_user_token}"}


# ============ Admin Fixtures ============

@pytest.fixture
def admin_token() -> str:
    return create_admin_token("admin@movian.test", "Movian Team")


@pytest.fixture
def admin_headers(admin_token) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}
