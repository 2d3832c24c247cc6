"""Current-user endpoints: sync the signed-in user's record after sign-in."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundOrForbidden
from app.core.security import require_user_id
from app.db.session import get_db
from app.schemas.user import UserRead, UserSync
from app.services.users import get_user, sync_user

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def read_me(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundOrForbidden("User not found")
    return user


@router.put("/me", response_model=UserRead)
async def sync_me(
    payload: UserSync,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    """Create the caller's user row on first sign-in, or update the display name."""
    return await sync_user(db, user_id, payload.name)
