"""Workout data access: owner-scoped retrieval and mutations.

Every function takes the caller's user id explicitly and filters on it at the
workout level, so no path can read or write another user's rows. Workouts are
returned fully hydrated: exercises ordered by ``order``, sets by ``set_number``.
Database errors propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import DEFAULT_PAGE_SIZE, FIRST_EXERCISE_ORDER, FIRST_SET_NUMBER
from app.core.dates import to_utc_millis, utc_day_window
from app.core.errors import Unauthenticated, ValidationFailed
from app.core.validation import (
    FieldViolation,
    check_exercise_name,
    check_set_values,
    check_started_at,
    check_workout_name,
)
from app.models import Workout, WorkoutExercise, WorkoutSet

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "started_at")


def _require_owner(user_id: str | None) -> str:
    if not user_id:
        raise Unauthenticated()
    return user_id


def _hydrated(stmt: Select) -> Select:
    # populate_existing: collections already in the identity map are reloaded, not reused stale
    return stmt.options(
        selectinload(Workout.exercises).selectinload(WorkoutExercise.sets)
    ).execution_options(populate_existing=True)


async def list_workouts_for_date(
    db: AsyncSession,
    user_id: str,
    day: date | datetime,
) -> list[Workout]:
    """
    The user's workouts that started on the UTC calendar day of `day`, most recent first.
    Both day boundaries are inclusive. Empty list when nothing matches.
    """
    _require_owner(user_id)
    start, end = utc_day_window(day)
    stmt = (
        select(Workout)
        .where(
            Workout.user_id == user_id,
            Workout.started_at >= start,
            Workout.started_at <= end,
        )
        .order_by(Workout.started_at.desc(), Workout.created_at.desc())
    )
    result = await db.execute(_hydrated(stmt))
    workouts = list(result.scalars().all())
    logger.debug("Found %d workouts for %s on %s", len(workouts), user_id, start.date())
    return workouts


async def list_workouts(
    db: AsyncSession,
    user_id: str,
    skip: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> list[Workout]:
    """All of the user's workouts, most recent first."""
    _require_owner(user_id)
    stmt = (
        select(Workout)
        .where(Workout.user_id == user_id)
        .order_by(Workout.started_at.desc(), Workout.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(_hydrated(stmt))
    return list(result.scalars().all())


async def get_workout(
    db: AsyncSession,
    workout_id: uuid.UUID,
    user_id: str,
) -> Workout | None:
    """One workout by id, or None if it does not exist or belongs to someone else."""
    _require_owner(user_id)
    stmt = select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
    result = await db.execute(_hydrated(stmt))
    return result.scalar_one_or_none()


async def create_workout(
    db: AsyncSession,
    user_id: str,
    name: Any,
    started_at: Any,
) -> Workout:
    """Start a workout. Raises ValidationFailed (nothing written) on a bad name or date."""
    _require_owner(user_id)
    violations = check_workout_name(name) + check_started_at(started_at)
    if violations:
        raise ValidationFailed(violations)

    workout = Workout(
        user_id=user_id,
        name=name.strip(),
        started_at=to_utc_millis(started_at),
        completed_at=None,
        exercises=[],
    )
    db.add(workout)
    await db.flush()
    logger.info("Created workout %s for %s", workout.id, user_id)
    return workout


async def update_workout(
    db: AsyncSession,
    workout_id: uuid.UUID,
    user_id: str,
    patch: Mapping[str, Any],
) -> Workout | None:
    """
    Apply the supplied name / started_at to the user's workout; omitted fields keep their values.
    Returns None when the user has no such workout. Raises ValidationFailed before any write.
    """
    _require_owner(user_id)
    changes = {k: patch[k] for k in UPDATABLE_FIELDS if k in patch}
    violations: list[FieldViolation] = []
    if "name" in changes:
        violations += check_workout_name(changes["name"])
    if "started_at" in changes:
        violations += check_started_at(changes["started_at"])
    if violations:
        raise ValidationFailed(violations)

    workout = await get_workout(db, workout_id, user_id)
    if workout is None:
        return None
    if "name" in changes:
        workout.name = changes["name"].strip()
    if "started_at" in changes:
        workout.started_at = to_utc_millis(changes["started_at"])
    await db.flush()
    logger.info("Updated workout %s (%s)", workout_id, ", ".join(changes) or "no changes")
    return workout


async def delete_workout(
    db: AsyncSession,
    workout_id: uuid.UUID,
    user_id: str,
) -> bool:
    """Delete the user's workout with its exercises and sets. False when there is no such workout."""
    workout = await get_workout(db, workout_id, user_id)
    if workout is None:
        return False
    await db.delete(workout)
    await db.flush()
    logger.info("Deleted workout %s", workout_id)
    return True


async def add_exercise(
    db: AsyncSession,
    workout_id: uuid.UUID,
    user_id: str,
    exercise_name: Any,
    order: int | None = None,
) -> WorkoutExercise | None:
    """Append an exercise to the user's workout (next free position unless order is given)."""
    _require_owner(user_id)
    violations = check_exercise_name(exercise_name)
    if order is not None and order < FIRST_EXERCISE_ORDER:
        violations.append(FieldViolation("order", "Order cannot be negative"))
    if violations:
        raise ValidationFailed(violations)

    owned = await db.execute(
        select(Workout.id).where(Workout.id == workout_id, Workout.user_id == user_id)
    )
    if owned.scalar_one_or_none() is None:
        return None

    if order is None:
        r = await db.execute(
            select(func.max(WorkoutExercise.order)).where(WorkoutExercise.workout_id == workout_id)
        )
        current = r.scalar()
        order = FIRST_EXERCISE_ORDER if current is None else current + 1

    exercise = WorkoutExercise(
        workout_id=workout_id,
        exercise_name=exercise_name.strip(),
        order=order,
        sets=[],
    )
    db.add(exercise)
    await db.flush()
    return exercise


async def add_set(
    db: AsyncSession,
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    user_id: str,
    reps: Any,
    weight: Any = None,
    set_number: int | None = None,
) -> WorkoutSet | None:
    """Append a set to an exercise of the user's workout (next set number unless given)."""
    _require_owner(user_id)
    violations = check_set_values(reps, weight)
    if set_number is not None and set_number < FIRST_SET_NUMBER:
        violations.append(FieldViolation("set_number", "Set number must be at least 1"))
    if violations:
        raise ValidationFailed(violations)

    owned = await db.execute(
        select(WorkoutExercise.id)
        .join(WorkoutExercise.workout)
        .where(
            WorkoutExercise.id == exercise_id,
            WorkoutExercise.workout_id == workout_id,
            Workout.user_id == user_id,
        )
    )
    if owned.scalar_one_or_none() is None:
        return None

    if set_number is None:
        r = await db.execute(
            select(func.max(WorkoutSet.set_number)).where(WorkoutSet.workout_exercise_id == exercise_id)
        )
        current = r.scalar()
        set_number = FIRST_SET_NUMBER if current is None else current + 1

    set_ = WorkoutSet(
        workout_exercise_id=exercise_id,
        set_number=set_number,
        reps=reps,
        weight=None if weight is None else Decimal(str(weight)),
    )
    db.add(set_)
    await db.flush()
    return set_
