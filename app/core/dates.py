"""UTC date helpers for date-scoped workout queries."""

from __future__ import annotations

from datetime import date, datetime, time, timezone


def to_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_utc_millis(value: datetime) -> datetime:
    """UTC value truncated to whole milliseconds, the precision of the day window bounds."""
    value = to_utc(value)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_iso_z(value: datetime) -> str:
    """ISO-8601 UTC string with millisecond precision and a Z suffix, safe in a query string."""
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_day_window(value: date | datetime) -> tuple[datetime, datetime]:
    """
    Inclusive [00:00:00.000, 23:59:59.999] UTC bounds of the calendar day containing value.
    The day is read from UTC calendar fields, never local time.
    """
    day = to_utc(value).date() if isinstance(value, datetime) else value
    start = datetime.combine(day, time(0, 0, 0, 0), tzinfo=timezone.utc)
    end = datetime.combine(day, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    return start, end
