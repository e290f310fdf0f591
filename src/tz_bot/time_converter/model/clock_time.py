"""
Canonical time-of-day representation for TZ Bot.

A ClockTime is an hour and minute tagged with how the hour is expressed:
on a 12-hour clock (AM/PM) or on a 24-hour ("military") clock. Values are
validated on construction and never change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from enum import Enum

from ...utils.core.exceptions import OutOfBoundsError


class MeridiemKind(Enum):
    """How the hour of a ClockTime is expressed."""

    AM = "AM"
    PM = "PM"
    MILITARY = "Military"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClockTime:
    """
    A validated time of day.

    For AM and PM values the hour is in 1..12, for military values it is
    in 0..23. The minute is always in 0..59. Construction raises
    OutOfBoundsError when these bounds do not hold.

    Examples:
        >>> ClockTime.of(3, 30, MeridiemKind.PM).to_24_hour()
        ClockTime(hour=15, minute=30, kind=<MeridiemKind.MILITARY: 'Military'>)
        >>> ClockTime.of(0, 0, MeridiemKind.MILITARY).to_12_hour()
        ClockTime(hour=12, minute=0, kind=<MeridiemKind.AM: 'AM'>)
    """

    hour: int
    minute: int
    kind: MeridiemKind

    def __post_init__(self) -> None:
        _ = self.validate()

    @classmethod
    def of(cls, hour: int, minute: int, kind: MeridiemKind) -> ClockTime:
        """
        Build a ClockTime, validating its components.

        Raises:
            OutOfBoundsError: If hour or minute is out of range for the kind
        """
        return cls(hour, minute, kind)

    @classmethod
    def from_time(cls, value: time) -> ClockTime:
        """Build a military ClockTime from a bare clock value."""
        return cls.of(value.hour, value.minute, MeridiemKind.MILITARY)

    def validate(self) -> ClockTime:
        """Check the invariant for this value's kind and return it unchanged."""
        if not 0 <= self.minute <= 59:
            raise OutOfBoundsError(self.hour, self.minute, self.kind)

        match self.kind:
            case MeridiemKind.AM | MeridiemKind.PM if 1 <= self.hour <= 12:
                return self
            case MeridiemKind.MILITARY if 0 <= self.hour <= 23:
                return self
            case _:
                raise OutOfBoundsError(self.hour, self.minute, self.kind)

    def to_12_hour(self) -> ClockTime:
        """Express this value on a 12-hour clock. AM and PM values are returned as-is."""
        _ = self.validate()
        hour, minute, kind = self.hour, self.minute, self.kind

        match (hour, kind):
            case (0, MeridiemKind.MILITARY):
                return ClockTime.of(12, minute, MeridiemKind.AM)
            case (12, MeridiemKind.MILITARY):
                return ClockTime.of(12, minute, MeridiemKind.PM)
            case (h, MeridiemKind.MILITARY) if h > 12:
                return ClockTime.of(h - 12, minute, MeridiemKind.PM)
            case (h, MeridiemKind.MILITARY):
                return ClockTime.of(h, minute, MeridiemKind.AM)
            case _:
                return self

    def to_24_hour(self) -> ClockTime:
        """Express this value on a 24-hour clock."""
        _ = self.validate()
        hour, minute, kind = self.hour, self.minute, self.kind

        match (hour, kind):
            case (12, MeridiemKind.AM):
                updated_hour = 0
            case (12, MeridiemKind.PM):
                updated_hour = 12
            case (h, MeridiemKind.PM):
                updated_hour = h + 12
            case (h, _):
                updated_hour = h

        return ClockTime.of(updated_hour, minute, MeridiemKind.MILITARY)

    def to_time(self) -> time:
        """Drop the meridiem tag, returning the equivalent bare clock value."""
        military = self.to_24_hour()
        return time(military.hour, military.minute)

    def __str__(self) -> str:
        if self.kind is MeridiemKind.MILITARY:
            return f"{self.hour:02d}:{self.minute:02d}"
        return f"{self.hour}:{self.minute:02d} {self.kind}"
