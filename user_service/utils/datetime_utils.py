"""
Centralized DateTime Utilities
==============================

All timestamps handled by the service are timezone-aware UTC.

Functions:
- utc_now(): current UTC time, truncated to BSON Date precision
- ensure_utc(): normalize naive/aware datetimes read back from MongoDB
- to_iso(): ISO 8601 string with a 'Z' suffix and millisecond precision
"""
from datetime import datetime, timezone as dt_timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    MongoDB stores dates with millisecond precision, so microseconds are
    truncated here to keep the value we return identical to the stored one.
    """
    current = datetime.now(dt_timezone.utc)
    return current.replace(microsecond=(current.microsecond // 1000) * 1000)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string (e.g. "2025-12-24T10:30:00.123Z").

    Naive datetimes are treated as UTC.
    """
    if dt is None:
        return None
    dt = ensure_utc(dt)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
