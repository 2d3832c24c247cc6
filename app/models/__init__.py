"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.user import User
from app.models.workout import Workout, WorkoutExercise, WorkoutSet

__all__ = [
    "User",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
]
