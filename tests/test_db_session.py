"""Engine factory, unit of work, and the users/workouts foreign key."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from app.core.config import Settings
from app.db.session import build_engine, unit_of_work
from app.models import User, Workout
from tests.conftest import USER_ID


def test_build_engine_uses_pool_settings():
    settings = Settings(database_pool_size=3, database_max_overflow=7, database_ssl_mode="disable")
    engine = build_engine(settings)
    assert engine.url.drivername == "postgresql+asyncpg"
    assert engine.sync_engine.pool.size() == 3
    assert engine.sync_engine.echo is False


@pytest.mark.asyncio
async def test_unit_of_work_commits_on_clean_exit(session_maker):
    async with unit_of_work(session_maker) as session:
        session.add(User(id="user_committed", name="Kept"))

    async with session_maker() as session:
        assert await session.get(User, "user_committed") is not None


@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_on_error(session_maker):
    with pytest.raises(RuntimeError):
        async with unit_of_work(session_maker) as session:
            session.add(User(id="user_discarded"))
            await session.flush()
            raise RuntimeError("boom")

    async with session_maker() as session:
        assert await session.get(User, "user_discarded") is None


@pytest.mark.asyncio
async def test_user_with_workouts_cannot_be_deleted(db):
    db.add(Workout(user_id=USER_ID, name="Legs", started_at=datetime(2025, 6, 1, 9, tzinfo=timezone.utc)))
    await db.commit()

    with pytest.raises(IntegrityError):
        await db.execute(delete(User).where(User.id == USER_ID))
    await db.rollback()

    result = await db.execute(select(Workout).where(Workout.user_id == USER_ID))
    assert len(result.scalars().all()) == 1
