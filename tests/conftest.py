"""
Pytest fixtures: in-memory SQLite database, per-test session, and an HTTP client
against the real app with the DB session and caller identity overridden.
"""

from collections.abc import AsyncGenerator
from typing import Optional

import pytest_asyncio
from fastapi import Header
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import get_current_user_id
from app.db.base import Base
from app.db.session import build_session_maker, get_db, unit_of_work
from app.main import app
from app.models import User

# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

USER_ID = "user_test_123"
OTHER_USER_ID = "user_other_456"


def auth_headers(user_id: str = USER_ID) -> dict[str, str]:
    """Headers the test identity override turns into a verified caller."""
    return {"Authorization": f"Bearer {user_id}"}


async def header_user_id(authorization: Optional[str] = Header(None)) -> str | None:
    """Test identity: the bearer token *is* the user id. No header means unauthenticated."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.split(" ", 1)[1] or None


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    maker = build_session_maker(engine)
    async with unit_of_work(maker) as session:
        session.add_all([User(id=USER_ID, name="Test User"), User(id=OTHER_USER_ID, name="Other User")])
    return maker


@pytest_asyncio.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with unit_of_work(session_maker) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = header_user_id
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
