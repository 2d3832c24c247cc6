"""Error taxonomy for workout operations.

Each error carries the HTTP status the API layer answers with. Missing and
foreign-owned workouts share ``NotFoundOrForbidden`` so callers cannot probe
for other users' data.
"""

from __future__ import annotations

from app.core.enums import ErrorKind
from app.core.validation import FieldViolation


class WorkoutLogError(Exception):
    """Base for errors reported to API callers."""

    status_code: int = 500
    kind: ErrorKind = ErrorKind.STORE_FAILURE
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(WorkoutLogError):
    status_code = 401
    kind = ErrorKind.UNAUTHENTICATED
    default_detail = "Unauthorized"


class NotFoundOrForbidden(WorkoutLogError):
    status_code = 404
    kind = ErrorKind.NOT_FOUND
    default_detail = "Workout not found"


class ValidationFailed(WorkoutLogError):
    status_code = 422
    kind = ErrorKind.VALIDATION_FAILED
    default_detail = "Validation failed"

    def __init__(self, violations: list[FieldViolation], detail: str | None = None):
        self.violations = list(violations)
        super().__init__(detail)


class StoreFailure(WorkoutLogError):
    status_code = 500
    kind = ErrorKind.STORE_FAILURE
    default_detail = "Internal server error"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    Unauthenticated.kind: Unauthenticated.status_code,
    NotFoundOrForbidden.kind: NotFoundOrForbidden.status_code,
    ValidationFailed.kind: ValidationFailed.status_code,
    StoreFailure.kind: StoreFailure.status_code,
}
