"""
Pytest configuration and shared fixtures.

Tests run against an in-memory SQLite database (aiosqlite) whose schema is
built from the SQLModel metadata. Environment defaults are set before the
application is imported, since settings are read at import time.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-use-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ["ADMIN_EMAILS"] = "ops@example.com, Lead@Example.com"

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app.core.database import get_db  # noqa: E402
from app.main import app as main_app  # noqa: E402

# Importing the package registers every table with SQLModel.metadata
from app.models import ContentAssets, Profiles, UserReports, Users  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture(scope="function")
async def engine():
    """
    Create a fresh in-memory database for each test function.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for each test."""
    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
def app(db_session: AsyncSession) -> FastAPI:
    """
    Create FastAPI app with test database session.

    This overrides the database dependency to use the test session.
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db

    yield main_app

    main_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing API endpoints.

    Usage:
        async def test_endpoint(client):
            response = await client.get("/api/v1/admin/me")
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Test Data Fixtures
# =============================================================================


async def create_user(
    db_session: AsyncSession,
    user_id: str,
    email: str | None = None,
    roles: list[str] | None = None,
) -> Users:
    """Insert a user and return it."""
    user = Users(user_id=user_id, email=email, roles=roles or [])
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def allow_listed_admin(db_session: AsyncSession) -> Users:
    """Admin by virtue of the ADMIN_EMAILS allow-list (no role claims)."""
    return await create_user(db_session, "admin-ops", email="ops@example.com")


@pytest.fixture
async def role_admin(db_session: AsyncSession) -> Users:
    """Admin by virtue of an "admin" role claim (address not allow-listed)."""
    return await create_user(db_session, "admin-role", email="mod@example.com", roles=["admin"])


@pytest.fixture
async def regular_user(db_session: AsyncSession) -> Users:
    """Authenticated user with no admin signal."""
    return await create_user(db_session, "regular", email="someone@example.com", roles=["user"])


@pytest.fixture
async def target_user(db_session: AsyncSession) -> Users:
    """User that moderation actions are applied to."""
    return await create_user(db_session, "u1", email="u1@example.com")


@pytest.fixture
async def open_report(db_session: AsyncSession, target_user: Users, regular_user: Users) -> UserReports:
    """An open report filed by regular_user against target_user."""
    report = UserReports(
        reporter_id=regular_user.user_id,
        reported_user_id=target_user.user_id,
        reason="harassment in chat",
    )
    db_session.add(report)
    await db_session.commit()
    await db_session.refresh(report)
    return report


PHOTO_URLS = [
    "https://cdn.example.com/u1/a.jpg",
    "https://cdn.example.com/u1/b.jpg",
    "https://cdn.example.com/u1/c.jpg",
]


@pytest.fixture
async def target_profile(db_session: AsyncSession, target_user: Users) -> Profiles:
    """target_user's gallery: three photos, the second one primary."""
    profile = Profiles(user_id=target_user.user_id, photos=list(PHOTO_URLS), primary_photo_idx=1)
    db_session.add(profile)
    await db_session.commit()
    await db_session.refresh(profile)
    return profile


@pytest.fixture
async def pending_photo(db_session: AsyncSession, target_profile: Profiles) -> ContentAssets:
    """A pending photo asset that is also target_user's first gallery photo."""
    asset = ContentAssets(user_id=target_profile.user_id, url=PHOTO_URLS[0])
    db_session.add(asset)
    await db_session.commit()
    await db_session.refresh(asset)
    return asset
