# tests/conftest.py

"""Pytest configuration and fixtures."""

import os

# Keep the application engine away from the on-disk development database.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("REDIS_URL", None)

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from gamehub.api.deps import get_notifier  # noqa: E402
from gamehub.auth import create_access_token  # noqa: E402
from gamehub.db.models import Base, User  # noqa: E402
from gamehub.db.session import get_db  # noqa: E402
from gamehub.main import app  # noqa: E402
from gamehub.notifications import InMemoryNotifier  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test, shared by every session."""
    test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Fixture to provide a database session to a test."""
    session_factory = async_sessionmaker(
        bind=engine, expire_on_commit=False, autocommit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def notifier() -> AsyncGenerator[InMemoryNotifier, None]:
    """An isolated notifier, closed after the test."""
    test_notifier = InMemoryNotifier()
    yield test_notifier
    await test_notifier.close()


@pytest.fixture
async def async_client(
    db_session: AsyncSession, notifier: InMemoryNotifier
) -> AsyncGenerator[AsyncClient, None]:
    """Fixture to provide an async test client for the API."""

    # Override dependencies to use the test database and notifier
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up the overrides after the test
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory fixture creating users directly in the database."""

    async def _make_user(username: str, profile_picture: str = "") -> User:
        user = User(username=username, profile_picture=profile_picture)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    """Factory building an Authorization header for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers


class RecordingConnection:
    """In-memory stand-in for a WebSocket that records what it is sent."""

    def __init__(self, ready: bool = True) -> None:
        self.ready = ready
        self.sent: list[dict] = []

    def is_ready(self) -> bool:
        return self.ready

    async def send_json(self, message: dict) -> None:
        self.sent.append(message)


@pytest.fixture
def recording_connection():
    """Factory for RecordingConnection instances."""
    return RecordingConnection
