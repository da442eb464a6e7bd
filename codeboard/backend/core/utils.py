"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import date, datetime, time, timedelta, timezone

# Widest "last N days" window a query accepts.
MAX_WINDOW_DAYS = 36500


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    """First instant of a calendar day."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last instant of a calendar day, for inclusive range bounds."""
    return datetime.combine(day, time.max)


def days_ago(days: int) -> datetime:
    """Cut-off instant for "within the last N days" queries."""
    return utc_now() - timedelta(days=days)


def as_date(value: date | str) -> date:
    """
    Normalize a day bucket returned by the database.

    SQLite's date() yields ISO strings, PostgreSQL yields date objects.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
