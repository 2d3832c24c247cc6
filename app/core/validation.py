"""Field-level precondition checks for workout input.

Each check returns a list of violations instead of raising, so callers can
collect every problem with a payload before deciding to reject it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from app.core.constants import MAX_EXERCISE_NAME_LENGTH, MAX_WORKOUT_NAME_LENGTH


@dataclass(frozen=True)
class FieldViolation:
    """One rejected field and a human-readable reason."""

    field: str
    message: str


def check_workout_name(name: Any) -> list[FieldViolation]:
    if not isinstance(name, str) or not name.strip():
        return [FieldViolation("name", "Workout name is required")]
    if len(name.strip()) > MAX_WORKOUT_NAME_LENGTH:
        return [
            FieldViolation(
                "name", f"Workout name must be {MAX_WORKOUT_NAME_LENGTH} characters or less"
            )
        ]
    return []


def check_started_at(started_at: Any) -> list[FieldViolation]:
    if not isinstance(started_at, datetime):
        return [FieldViolation("started_at", "Invalid date")]
    return []


def check_exercise_name(exercise_name: Any) -> list[FieldViolation]:
    if not isinstance(exercise_name, str) or not exercise_name.strip():
        return [FieldViolation("exercise_name", "Exercise name is required")]
    if len(exercise_name.strip()) > MAX_EXERCISE_NAME_LENGTH:
        return [
            FieldViolation(
                "exercise_name",
                f"Exercise name must be {MAX_EXERCISE_NAME_LENGTH} characters or less",
            )
        ]
    return []


def check_set_values(reps: Any, weight: Any) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    # bool is an int subclass; True reps is not a rep count
    if isinstance(reps, bool) or not isinstance(reps, int) or reps < 0:
        violations.append(FieldViolation("reps", "Reps must be a non-negative whole number"))
    if weight is not None:
        if isinstance(weight, bool) or not isinstance(weight, (int, float, Decimal)):
            violations.append(FieldViolation("weight", "Weight must be a number"))
        elif weight < 0:
            violations.append(FieldViolation("weight", "Weight cannot be negative"))
    return violations
