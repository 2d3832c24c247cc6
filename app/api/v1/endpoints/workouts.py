"""Workout endpoints: date-scoped listing, lookup, create/update/delete, exercises and sets."""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import DEFAULT_PAGE_SIZE
from app.core.errors import STATUS_BY_KIND, NotFoundOrForbidden
from app.core.security import get_current_user_id, require_user_id
from app.db.session import get_db
from app.schemas.workout import (
    ActionResult,
    WorkoutCreate,
    WorkoutExerciseCreate,
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutSetCreate,
    WorkoutSetRead,
    WorkoutUpdate,
)
from app.services import workouts as workout_service
from app.services.workout_actions import (
    create_workout_action,
    delete_workout_action,
    update_workout_action,
)

router = APIRouter()


def _respond(result: ActionResult, response: Response) -> ActionResult:
    if not result.success and result.error_kind is not None:
        response.status_code = STATUS_BY_KIND[result.error_kind]
    return result


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
    date: datetime | None = Query(None, description="Any instant on the wanted day; its UTC date is used"),
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=200),
):
    """Workouts on one UTC day (newest first) when `date` is given, else all workouts paginated."""
    if date is not None:
        return await workout_service.list_workouts_for_date(db, user_id, date)
    return await workout_service.list_workouts(db, user_id, skip=skip, limit=limit)


@router.post("", response_model=ActionResult, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    """Start a new workout for the signed-in user."""
    result = await create_workout_action(db, user_id, payload.name, payload.started_at)
    return _respond(result, response)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    """Get one workout with its exercises and sets."""
    workout = await workout_service.get_workout(db, workout_id, user_id)
    if workout is None:
        raise NotFoundOrForbidden()
    return workout


@router.patch("/{workout_id}", response_model=ActionResult)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    """Rename a workout or move its start time. Only fields present in the body change."""
    patch = payload.model_dump(exclude_unset=True)
    result = await update_workout_action(db, user_id, workout_id, patch)
    return _respond(result, response)


@router.delete("/{workout_id}", response_model=ActionResult)
async def delete_workout(
    workout_id: uuid.UUID,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: str | None = Depends(get_current_user_id),
):
    """Delete a workout together with its exercises and sets."""
    result = await delete_workout_action(db, user_id, workout_id)
    return _respond(result, response)


@router.post("/{workout_id}/exercises", response_model=WorkoutExerciseRead, status_code=201)
async def add_exercise(
    workout_id: uuid.UUID,
    payload: WorkoutExerciseCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    """Append an exercise at the end of the workout."""
    exercise = await workout_service.add_exercise(db, workout_id, user_id, payload.exercise_name)
    if exercise is None:
        raise NotFoundOrForbidden()
    return exercise


@router.post(
    "/{workout_id}/exercises/{exercise_id}/sets",
    response_model=WorkoutSetRead,
    status_code=201,
)
async def add_set(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: WorkoutSetCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    """Log the next set of an exercise."""
    set_ = await workout_service.add_set(
        db, workout_id, exercise_id, user_id, payload.reps, payload.weight
    )
    if set_ is None:
        raise NotFoundOrForbidden("Exercise not found")
    return set_
