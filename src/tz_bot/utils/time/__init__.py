"""
Unified time management utilities for TZ Bot.

This package provides consistent timezone handling across the entire application.
"""

from .timezone import (
    get_timezone,
    is_valid_timezone,
    get_utc_now,
    ensure_timezone_aware,
    local_date,
    combine_local,
    to_utc,
    format_clock,
)

__all__ = [
    "get_timezone",
    "is_valid_timezone",
    "get_utc_now",
    "ensure_timezone_aware",
    "local_date",
    "combine_local",
    "to_utc",
    "format_clock",
]
