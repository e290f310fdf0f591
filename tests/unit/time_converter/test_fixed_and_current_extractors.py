"""Tests for the fixed-value and current-time extractors."""

import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.tz_bot.time_converter.extractor import (
    CurrentTimeExtractor,
    ExtractionContext,
    FixedTimeExtractor,
)
from src.tz_bot.time_converter.message_handler import (
    CURRENT_TIME_PATTERN,
    MIDNIGHT_PATTERN,
    NOON_PATTERN,
)
from src.tz_bot.time_converter.model.clock_time import ClockTime, MeridiemKind
from src.tz_bot.utils.core.exceptions import ExtractorConfigurationError

NOON = ClockTime.of(12, 0, MeridiemKind.MILITARY)
MIDNIGHT = ClockTime.of(0, 0, MeridiemKind.MILITARY)


class TestFixedTimeExtractor:
    """Test cases for FixedTimeExtractor."""

    def test_match_returns_value(self, london_context: ExtractionContext) -> None:
        """Test a matching phrase yields the configured value."""
        extractor = FixedTimeExtractor(NOON_PATTERN, NOON)

        assert extractor.extract("see you at noon", london_context) == [NOON]

    def test_no_match_returns_empty(self, london_context: ExtractionContext) -> None:
        """Test text without the phrase yields nothing."""
        extractor = FixedTimeExtractor(MIDNIGHT_PATTERN, MIDNIGHT)

        assert extractor.extract("see you at noon", london_context) == []

    def test_repeated_matches_yield_one_value(self, london_context: ExtractionContext) -> None:
        """Test the value is emitted once regardless of the number of matches."""
        extractor = FixedTimeExtractor(NOON_PATTERN, NOON)

        assert extractor.extract("noon? NOON! Midday.", london_context) == [NOON]

    def test_case_insensitive_stock_pattern(self, london_context: ExtractionContext) -> None:
        """Test the stock midnight pattern ignores case."""
        extractor = FixedTimeExtractor(MIDNIGHT_PATTERN, MIDNIGHT)

        assert extractor.extract("MidNight release", london_context) == [MIDNIGHT]

    def test_accepts_compiled_pattern(self, london_context: ExtractionContext) -> None:
        """Test a precompiled pattern is used as-is."""
        pattern = re.compile(r"lunch", re.IGNORECASE)
        extractor = FixedTimeExtractor(pattern, NOON)

        assert extractor.pattern is pattern
        assert extractor.extract("Lunch?", london_context) == [NOON]

    def test_invalid_pattern_raises(self) -> None:
        """Test an uncompilable pattern is a configuration error."""
        with pytest.raises(ExtractorConfigurationError):
            _ = FixedTimeExtractor(r"(noon", NOON)

    def test_result_ignores_context(self) -> None:
        """Test the value does not depend on who sent the message or when."""
        extractor = FixedTimeExtractor(NOON_PATTERN, NOON)
        tokyo = ExtractionContext.for_message(
            ZoneInfo("Asia/Tokyo"), datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)
        )

        assert extractor.extract("noon", tokyo) == [NOON]


class TestCurrentTimeExtractor:
    """Test cases for CurrentTimeExtractor."""

    def test_match_returns_message_clock_time(self, london_context: ExtractionContext) -> None:
        """Test a question about the current time yields the local send time."""
        extractor = CurrentTimeExtractor(CURRENT_TIME_PATTERN)

        result = extractor.extract("what time is it now?", london_context)

        assert result == [ClockTime.of(15, 0, MeridiemKind.MILITARY)]

    def test_current_time_phrase(self, london_context: ExtractionContext) -> None:
        """Test the alternative phrase is recognized."""
        extractor = CurrentTimeExtractor(CURRENT_TIME_PATTERN)

        assert extractor.extract("Current   time please", london_context) == [
            london_context.message_clock_time
        ]

    def test_no_match_returns_empty(self, london_context: ExtractionContext) -> None:
        """Test unrelated text yields nothing."""
        extractor = CurrentTimeExtractor(CURRENT_TIME_PATTERN)

        assert extractor.extract("what is it", london_context) == []

    def test_at_most_one_value(self, london_context: ExtractionContext) -> None:
        """Test repeated questions still yield a single value."""
        extractor = CurrentTimeExtractor(CURRENT_TIME_PATTERN)

        result = extractor.extract("current time? current time!", london_context)

        assert len(result) == 1

    def test_invalid_pattern_raises(self) -> None:
        """Test an uncompilable pattern is a configuration error."""
        with pytest.raises(ExtractorConfigurationError):
            _ = CurrentTimeExtractor(r"[now")
