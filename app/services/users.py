"""User record sync: the auth provider owns identities, we keep a row per signed-in user."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Unauthenticated
from app.models import User

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def sync_user(db: AsyncSession, user_id: str, name: str | None = None) -> User:
    """Create the user row on first sign-in; afterwards refresh the display name if one is given."""
    if not user_id:
        raise Unauthenticated()
    user = await get_user(db, user_id)
    if user is None:
        user = User(id=user_id, name=name)
        db.add(user)
        logger.info("Registered user %s", user_id)
    elif name is not None and name != user.name:
        user.name = name
    await db.flush()
    return user
