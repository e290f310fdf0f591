"""
Tests for timezone handling utilities.

This module tests timezone lookup, local date anchoring around daylight
saving transitions, and 12-hour output formatting.
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

import pytest

from src.tz_bot.utils.time.timezone import (
    combine_local,
    ensure_timezone_aware,
    format_clock,
    get_timezone,
    get_utc_now,
    is_valid_timezone,
    local_date,
    to_utc,
)

LONDON = ZoneInfo("Europe/London")
NEW_YORK = ZoneInfo("America/New_York")


class TestTimezoneLookup:
    """Test timezone lookup by IANA key."""

    def test_get_timezone(self) -> None:
        """Test a known key returns its ZoneInfo."""
        assert get_timezone("Europe/London") == LONDON

    @pytest.mark.parametrize("key", ["Not/AZone", "../etc/passwd"])
    def test_get_timezone_unknown(self, key: str) -> None:
        """Test unknown or malformed keys raise ValueError."""
        with pytest.raises(ValueError, match="Unknown timezone"):
            _ = get_timezone(key)

    def test_is_valid_timezone(self) -> None:
        """Test the boolean form of the lookup."""
        assert is_valid_timezone("America/Los_Angeles")
        assert not is_valid_timezone("America/Springfield")


class TestTimezoneAware:
    """Test timezone awareness utilities."""

    def test_get_utc_now(self) -> None:
        """Test the current time is aware and in UTC."""
        now = get_utc_now()
        assert now.tzinfo is timezone.utc

    def test_ensure_timezone_aware_with_naive_datetime(self) -> None:
        """Test naive datetimes are taken to be UTC."""
        aware_dt = ensure_timezone_aware(datetime(2025, 7, 25, 14, 30))

        assert aware_dt == datetime(2025, 7, 25, 14, 30, tzinfo=timezone.utc)

    def test_ensure_timezone_aware_with_aware_datetime(self) -> None:
        """Test aware datetimes are returned unchanged."""
        aware_dt = datetime(2025, 7, 25, 14, 30, tzinfo=NEW_YORK)

        assert ensure_timezone_aware(aware_dt) is aware_dt

    def test_to_utc(self) -> None:
        """Test conversion of a local time to UTC."""
        result = to_utc(datetime(2025, 7, 25, 10, 0, tzinfo=NEW_YORK))

        assert result == datetime(2025, 7, 25, 14, 0, tzinfo=timezone.utc)
        assert result.tzinfo is timezone.utc


class TestLocalDate:
    """Test calendar date resolution in a timezone."""

    def test_local_date_behind_utc(self) -> None:
        """Test a zone behind UTC can still be on the previous day."""
        reference = datetime(2025, 7, 25, 3, 0, tzinfo=timezone.utc)

        assert local_date(reference, NEW_YORK) == date(2025, 7, 24)

    def test_local_date_ahead_of_utc(self) -> None:
        """Test a zone ahead of UTC can already be on the next day."""
        reference = datetime(2025, 7, 25, 20, 0, tzinfo=timezone.utc)

        assert local_date(reference, ZoneInfo("Asia/Tokyo")) == date(2025, 7, 26)


class TestCombineLocal:
    """Test anchoring clock values to a local date."""

    def test_ordinary_time(self) -> None:
        """Test an ordinary wall-clock time maps to one instant."""
        result = combine_local(date(2025, 7, 1), time(15, 0), LONDON)

        assert result is not None
        assert to_utc(result) == datetime(2025, 7, 1, 14, 0, tzinfo=timezone.utc)

    def test_spring_forward_gap(self) -> None:
        """Test a time skipped by the spring transition is rejected."""
        assert combine_local(date(2025, 3, 9), time(2, 30), NEW_YORK) is None
        assert combine_local(date(2025, 3, 30), time(1, 0), LONDON) is None

    def test_fall_back_overlap(self) -> None:
        """Test a time occurring twice in the autumn transition is rejected."""
        assert combine_local(date(2025, 11, 2), time(1, 30), NEW_YORK) is None
        assert combine_local(date(2025, 10, 26), time(1, 59), LONDON) is None

    def test_edges_of_transition(self) -> None:
        """Test times just outside a transition are still accepted."""
        assert combine_local(date(2025, 3, 30), time(0, 59), LONDON) is not None
        assert combine_local(date(2025, 3, 30), time(2, 0), LONDON) is not None
        assert combine_local(date(2025, 10, 26), time(2, 0), LONDON) is not None

    def test_utc_has_no_gaps(self) -> None:
        """Test every time of day is defined in UTC."""
        utc = ZoneInfo("UTC")
        for hour in range(24):
            assert combine_local(date(2025, 3, 30), time(hour, 30), utc) is not None


class TestFormatClock:
    """Test 12-hour output formatting."""

    @pytest.mark.parametrize(
        ("instant", "tz", "expected"),
        [
            (datetime(2025, 7, 1, 14, 5, tzinfo=timezone.utc), LONDON, " 3:05 PM BST"),
            (datetime(2025, 7, 1, 14, 5, tzinfo=timezone.utc), NEW_YORK, "10:05 AM EDT"),
            (datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc), LONDON, "12:00 AM GMT"),
            (datetime(2025, 1, 1, 17, 0, tzinfo=timezone.utc), NEW_YORK, "12:00 PM EST"),
            (
                datetime(2025, 7, 1, 14, 0, tzinfo=timezone.utc),
                ZoneInfo("America/Los_Angeles"),
                " 7:00 AM PDT",
            ),
        ],
    )
    def test_format_clock(self, instant: datetime, tz: ZoneInfo, expected: str) -> None:
        """Test hour padding, meridiem and zone abbreviation."""
        assert format_clock(instant, tz) == expected

    def test_format_clock_naive_input(self) -> None:
        """Test naive input is treated as UTC."""
        assert format_clock(datetime(2025, 7, 1, 14, 5), LONDON) == " 3:05 PM BST"
