"""Workout mutations as plain result values.

Actions never raise for expected failures: they return an ActionResult with
the error category, any field issues, and on success a hint of which page the
client should show next. Navigation itself is left to the caller.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DASHBOARD_PATH
from app.core.dates import to_iso_z
from app.core.enums import ErrorKind
from app.core.errors import NotFoundOrForbidden, Unauthenticated, ValidationFailed
from app.models import Workout
from app.schemas.workout import ActionResult, FieldIssue, WorkoutRead
from app.services import workouts as workout_service

logger = logging.getLogger(__name__)


def dashboard_url(started_at: datetime | None = None) -> str:
    """Dashboard link, scoped to the workout's day when a start time is known."""
    if started_at is None:
        return DASHBOARD_PATH
    return f"{DASHBOARD_PATH}?date={to_iso_z(started_at)}"


def _unauthorized() -> ActionResult:
    return ActionResult(success=False, error=Unauthenticated.default_detail, error_kind=ErrorKind.UNAUTHENTICATED)


def _not_found() -> ActionResult:
    return ActionResult(success=False, error=NotFoundOrForbidden.default_detail, error_kind=ErrorKind.NOT_FOUND)


def _invalid(e: ValidationFailed) -> ActionResult:
    return ActionResult(
        success=False,
        error=e.detail,
        error_kind=ErrorKind.VALIDATION_FAILED,
        issues=[FieldIssue(field=v.field, message=v.message) for v in e.violations],
    )


def _store_failure(message: str) -> ActionResult:
    return ActionResult(success=False, error=message, error_kind=ErrorKind.STORE_FAILURE)


def _saved(workout: Workout) -> ActionResult:
    return ActionResult(
        success=True,
        workout=WorkoutRead.model_validate(workout),
        redirect_url=dashboard_url(workout.started_at),
    )


async def create_workout_action(
    db: AsyncSession,
    user_id: str | None,
    name: Any,
    started_at: Any,
) -> ActionResult:
    if not user_id:
        return _unauthorized()
    try:
        workout = await workout_service.create_workout(db, user_id, name, started_at)
    except ValidationFailed as e:
        return _invalid(e)
    except SQLAlchemyError:
        logger.exception("Creating workout for %s failed", user_id)
        await db.rollback()
        return _store_failure("Failed to create workout")
    return _saved(workout)


async def update_workout_action(
    db: AsyncSession,
    user_id: str | None,
    workout_id: uuid.UUID,
    patch: Mapping[str, Any],
) -> ActionResult:
    if not user_id:
        return _unauthorized()
    try:
        workout = await workout_service.update_workout(db, workout_id, user_id, patch)
    except ValidationFailed as e:
        return _invalid(e)
    except SQLAlchemyError:
        logger.exception("Updating workout %s failed", workout_id)
        await db.rollback()
        return _store_failure("Failed to update workout")
    if workout is None:
        return _not_found()
    return _saved(workout)


async def delete_workout_action(
    db: AsyncSession,
    user_id: str | None,
    workout_id: uuid.UUID,
) -> ActionResult:
    if not user_id:
        return _unauthorized()
    try:
        deleted = await workout_service.delete_workout(db, workout_id, user_id)
    except SQLAlchemyError:
        logger.exception("Deleting workout %s failed", workout_id)
        await db.rollback()
        return _store_failure("Failed to delete workout")
    if not deleted:
        return _not_found()
    return ActionResult(success=True, redirect_url=dashboard_url())
