"""Shared enums for services and API."""

from enum import Enum


class ErrorKind(str, Enum):
    """Outward failure categories of a workout operation."""

    UNAUTHENTICATED = "unauthenticated"  # No verified caller identity
    NOT_FOUND = "not_found"  # Missing, or owned by someone else
    VALIDATION_FAILED = "validation_failed"  # Field-level violations
    STORE_FAILURE = "store_failure"  # Database error
