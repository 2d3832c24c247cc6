"""Engine construction and the per-request unit of work."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """asyncpg engine sized from settings; SQL is echoed in debug mode."""
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Workouts are serialized after commit, so loaded attributes must stay populated
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def unit_of_work(maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """One session, one transaction: committed when the block exits cleanly, rolled back otherwise."""
    async with maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()


engine = build_engine(get_settings())
async_session_maker = build_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with unit_of_work(async_session_maker) as session:
        yield session
