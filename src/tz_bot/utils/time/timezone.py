"""
Unified timezone handling utilities for TZ Bot.

This module provides the timezone lookups, local-date anchoring and output
formatting used by the time conversion pipeline.
"""

import logging
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def get_timezone(key: str) -> ZoneInfo:
    """
    Look up an IANA timezone by key.

    Args:
        key: IANA timezone key (e.g. "Europe/London")

    Returns:
        ZoneInfo object for the key

    Raises:
        ValueError: If the key does not name a known timezone

    Examples:
        >>> get_timezone("America/New_York").key
        'America/New_York'
    """
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {key!r}") from e


def is_valid_timezone(key: str) -> bool:
    """Check whether a string names a known IANA timezone."""
    try:
        _ = get_timezone(key)
    except ValueError:
        return False
    return True


def get_utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Examples:
        >>> get_utc_now().tzinfo is timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_timezone_aware(dt: datetime) -> datetime:
    """
    Ensure a datetime object is timezone-aware.

    Naive datetimes are assumed to be in UTC, which is how Discord reports
    message timestamps. Aware datetimes are returned unchanged.

    Examples:
        >>> ensure_timezone_aware(datetime(2025, 7, 25, 14, 30)).tzinfo is timezone.utc
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def local_date(reference: datetime, tz: ZoneInfo) -> date:
    """
    Get the calendar date at a given instant in a given timezone.

    Examples:
        >>> ref = datetime(2025, 7, 25, 2, 0, tzinfo=timezone.utc)
        >>> local_date(ref, ZoneInfo("America/Los_Angeles"))
        datetime.date(2025, 7, 24)
    """
    return ensure_timezone_aware(reference).astimezone(tz).date()


def combine_local(day: date, clock: time, tz: ZoneInfo) -> datetime | None:
    """
    Combine a local date and clock value into an aware datetime.

    Returns None when the wall-clock value does not map to exactly one
    instant in the timezone on that date: either it is skipped by a
    daylight saving transition or it occurs twice.

    Examples:
        >>> combine_local(date(2025, 3, 30), time(1, 30), ZoneInfo("Europe/London")) is None
        True
        >>> combine_local(date(2025, 7, 1), time(12, 0), ZoneInfo("Europe/London")).hour
        12
    """
    earlier = datetime.combine(day, clock, tzinfo=tz)
    later = earlier.replace(fold=1)

    if earlier.utcoffset() != later.utcoffset():
        logger.debug(f"Local time {day} {clock} is not uniquely defined in {tz.key}")
        return None

    return earlier


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC."""
    return ensure_timezone_aware(dt).astimezone(timezone.utc)


def format_clock(dt: datetime, tz: ZoneInfo) -> str:
    """
    Format an instant as a 12-hour wall-clock time in the given timezone.

    The hour is space-padded rather than zero-padded and the zone
    abbreviation is appended.

    Examples:
        >>> instant = datetime(2025, 7, 1, 14, 5, tzinfo=timezone.utc)
        >>> format_clock(instant, ZoneInfo("Europe/London"))
        ' 3:05 PM BST'
        >>> format_clock(instant, ZoneInfo("America/New_York"))
        '10:05 AM EDT'
    """
    formatted = ensure_timezone_aware(dt).astimezone(tz).strftime("%I:%M %p %Z")
    if formatted.startswith("0"):
        formatted = " " + formatted[1:]
    return formatted
