"""
Timestamp conversion for documents leaving Firestore.

Firestore returns timestamps as timezone-aware datetimes; the API exposes
them as ISO 8601 strings.
"""

from datetime import date, datetime, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp_to_iso(value: Any) -> str:
    """
    Convert a stored timestamp to an ISO 8601 string.

    Args:
        value: A datetime (Firestore's DatetimeWithNanoseconds is one), an
            already formatted string, or None for a server timestamp that has
            not been resolved yet.

    Returns:
        ISO 8601 string. Missing values fall back to the current time.
    """
    if value is None:
        return utc_now().isoformat()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def export_date_suffix(today: date | None = None) -> str:
    """Date suffix for export filenames (YYYY-MM-DD)."""
    return (today or utc_now().date()).strftime("%Y-%m-%d")
