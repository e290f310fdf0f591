"""Value types used by the time conversion pipeline."""

from .clock_time import ClockTime, MeridiemKind

__all__ = ["ClockTime", "MeridiemKind"]
