"""Database package: engine, per-request session, declarative base."""

from app.db.base import Base
from app.db.session import async_session_maker, build_engine, build_session_maker, engine, get_db, unit_of_work

__all__ = ["Base", "async_session_maker", "build_engine", "build_session_maker", "engine", "get_db", "unit_of_work"]
