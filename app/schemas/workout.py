"""Workout, WorkoutExercise and WorkoutSet schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from app.core.dates import to_utc
from app.core.enums import ErrorKind

# SQLite hands back naive datetimes; everything stored is UTC.
UTCDateTime = Annotated[datetime, AfterValidator(to_utc)]


class WorkoutSetCreate(BaseModel):
    reps: int
    weight: Decimal | None = None


class WorkoutSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    set_number: int
    reps: int
    weight: Decimal | None = None
    created_at: UTCDateTime


class WorkoutExerciseCreate(BaseModel):
    exercise_name: str


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercise_name: str
    order: int
    created_at: UTCDateTime
    sets: list[WorkoutSetRead] = []


class WorkoutCreate(BaseModel):
    """Body for starting a workout. Name rules are checked by the service, not here."""

    name: str
    started_at: datetime


class WorkoutUpdate(BaseModel):
    name: str | None = None
    started_at: datetime | None = None


class WorkoutRead(BaseModel):
    """Workout with nested exercises (ordered) and their sets (ordered)."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    started_at: UTCDateTime
    completed_at: UTCDateTime | None = None
    created_at: UTCDateTime
    updated_at: UTCDateTime
    exercises: list[WorkoutExerciseRead] = []


class FieldIssue(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    field: str
    message: str


class ActionResult(BaseModel):
    """Outcome of a workout mutation; redirect_url is a hint for where the client goes next."""

    success: bool
    workout: WorkoutRead | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    issues: list[FieldIssue] = Field(default_factory=list)
    redirect_url: str | None = None
