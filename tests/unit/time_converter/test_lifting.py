"""
Tests for extractor lifting.

Lifting turns ClockTime extractors into extractors producing UTC instants,
anchored to the local date of the message in the author's timezone.
"""

from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from src.tz_bot.time_converter.extractor import (
    DynamicTimeExtractor,
    ExtractionContext,
    FixedTimeExtractor,
    lift,
    lift_to_bare_clock,
    lift_to_instant,
)
from src.tz_bot.time_converter.message_handler import CLOCK_TIME_PATTERN
from src.tz_bot.time_converter.model.clock_time import ClockTime, MeridiemKind

LONDON = ZoneInfo("Europe/London")
LOS_ANGELES = ZoneInfo("America/Los_Angeles")


def fixed(value: ClockTime) -> FixedTimeExtractor:
    return FixedTimeExtractor(r"(?i:go)", value)


def context_at(tz: ZoneInfo, sent_at: datetime) -> ExtractionContext:
    return ExtractionContext.for_message(tz, sent_at)


class TestLiftToBareClock:
    """Test the first lifting stage."""

    def test_converts_to_24_hour_time(self, london_context: ExtractionContext) -> None:
        """Test ClockTime values become 24-hour bare clock values."""
        lifted = lift_to_bare_clock(DynamicTimeExtractor(CLOCK_TIME_PATTERN))

        assert lifted.extract("3pm and 12am", london_context) == [time(15, 0), time(0, 0)]

    def test_empty_stays_empty(self, london_context: ExtractionContext) -> None:
        """Test an extractor with no results lifts to one with no results."""
        lifted = lift_to_bare_clock(fixed(ClockTime.of(1, 0, MeridiemKind.AM)))

        assert lifted.extract("nothing", london_context) == []


class TestLiftToInstant:
    """Test the second lifting stage and the composed lift."""

    def test_anchors_to_local_date(self, london_context: ExtractionContext) -> None:
        """Test a clock value becomes the UTC instant of that time today in the local zone."""
        lifted = lift(fixed(ClockTime.of(12, 0, MeridiemKind.MILITARY)))

        result = lifted.extract("go", london_context)

        assert result == [datetime(2025, 7, 1, 11, 0, tzinfo=timezone.utc)]
        assert result[0].tzinfo is timezone.utc

    def test_local_date_differs_from_utc_date(self) -> None:
        """Test "today" is the author's local date, not the UTC date."""
        # 02:00 UTC on 2 July is still 1 July in Los Angeles
        context = context_at(LOS_ANGELES, datetime(2025, 7, 2, 2, 0, tzinfo=timezone.utc))
        lifted = lift(fixed(ClockTime.of(12, 0, MeridiemKind.PM)))

        assert lifted.extract("go", context) == [
            datetime(2025, 7, 1, 19, 0, tzinfo=timezone.utc)
        ]

    def test_winter_offset(self) -> None:
        """Test the offset in force on the local date is used."""
        context = context_at(LONDON, datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc))
        lifted = lift(fixed(ClockTime.of(3, 0, MeridiemKind.PM)))

        assert lifted.extract("go", context) == [
            datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)
        ]

    def test_nonexistent_local_time_is_dropped(self) -> None:
        """Test a wall-clock time skipped by the spring transition yields nothing."""
        context = context_at(LONDON, datetime(2025, 3, 30, 12, 0, tzinfo=timezone.utc))
        lifted = lift(fixed(ClockTime.of(1, 30, MeridiemKind.AM)))

        assert lifted.extract("go", context) == []

    def test_repeated_local_time_is_dropped(self) -> None:
        """Test a wall-clock time occurring twice in the autumn transition yields nothing."""
        context = context_at(LONDON, datetime(2025, 10, 26, 12, 0, tzinfo=timezone.utc))
        lifted = lift(fixed(ClockTime.of(1, 30, MeridiemKind.AM)))

        assert lifted.extract("go", context) == []

    def test_only_undefined_values_are_dropped(self) -> None:
        """Test other values from the same extractor survive a dropped one."""
        context = context_at(LONDON, datetime(2025, 3, 30, 12, 0, tzinfo=timezone.utc))
        lifted = lift(DynamicTimeExtractor(CLOCK_TIME_PATTERN))

        result = lifted.extract("1:30am or 3am", context)

        assert result == [datetime(2025, 3, 30, 2, 0, tzinfo=timezone.utc)]

    def test_two_stage_composition_matches_lift(self, london_context: ExtractionContext) -> None:
        """Test applying the stages by hand gives the same result as lift."""
        base = DynamicTimeExtractor(CLOCK_TIME_PATTERN)
        by_hand = lift_to_instant(lift_to_bare_clock(base))

        text = "9am, 11:15pm"
        assert by_hand.extract(text, london_context) == lift(base).extract(text, london_context)
