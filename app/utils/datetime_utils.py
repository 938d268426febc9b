"""
Datetime utilities.

All persisted timestamps are timezone-aware UTC.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Drivers that drop tzinfo return naive values; those are stored as UTC.

    Args:
        value: Aware or naive datetime

    Returns:
        Aware UTC datetime
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_day(value: datetime) -> date:
    """Calendar day of a timestamp in UTC."""
    return ensure_utc(value).date()
