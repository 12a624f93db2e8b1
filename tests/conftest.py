"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, integration and API tests.
"""

import os
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import configure_mappers

from ezteach.auth import CallerIdentity, CredentialDeletionResult
from ezteach.config import settings
from ezteach.core.models import Base, District, School

# Ensure all mappers are configured
configure_mappers()

# Wednesday
FIXED_NOW = datetime(2026, 3, 18, 15, 30, tzinfo=UTC)


class FakeCredentialStore:
    """In-memory credential store recording every deletion attempt."""

    def __init__(self, *, fail: bool = False, error: Exception | None = None):
        self.fail = fail
        self.error = error
        self.attempts: list[str] = []

    async def delete_credential(self, uid: str) -> CredentialDeletionResult:
        self.attempts.append(uid)
        if self.error is not None:
            raise self.error
        if self.fail:
            return CredentialDeletionResult(uid=uid, deleted=False, error="admin API returned 503")
        return CredentialDeletionResult(uid=uid, deleted=True)


def make_token(uid: str, **claims) -> str:
    """Sign a bearer token the app will accept."""
    payload = {"sub": uid, **claims}
    if settings.AUTH_JWT_AUDIENCE is not None:
        payload.setdefault("aud", settings.AUTH_JWT_AUDIENCE)
    return jwt.encode(payload, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHMS[0])


def auth_headers(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(uid)}"}


def caller(uid: str) -> CallerIdentity:
    return CallerIdentity(uid=uid)


@pytest.fixture
async def async_engine(tmp_path):
    """Create async engine for testing.

    Uses TEST_DATABASE_URL when set (e.g. PostgreSQL in CI), otherwise a
    throwaway SQLite file.
    """
    database_url = os.getenv("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/test.db")
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def credential_store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
async def district(db_session: AsyncSession) -> District:
    """Create a test district."""
    district = District(id="district-1", name="Riverside Unified")
    db_session.add(district)
    await db_session.commit()
    return district


@pytest.fixture
async def school(db_session: AsyncSession, district: District) -> School:
    """Create a test school in the test district with five students on roll."""
    school = School(
        id="school-1", name="Lincoln Elementary", district_id=district.id, student_count=5
    )
    db_session.add(school)
    await db_session.commit()
    return school


@pytest.fixture
async def client(
    session_factory, credential_store: FakeCredentialStore, clock
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database, credential store and clock overrides."""
    from ezteach.api.deps import get_clock, get_credential_store
    from ezteach.core.database import get_db
    from ezteach.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_store] = lambda: credential_store
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
