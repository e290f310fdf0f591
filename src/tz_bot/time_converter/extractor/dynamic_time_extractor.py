"""
Extractor for explicitly written times such as "3pm" or "10:45 am".

The pattern supplies the grammar; this module only cares about the named
groups it captures:

- hours (required): the hour on a 12-hour clock
- minutes (optional): the minute, 0 when absent
- time_kind (required): "am" or "pm", in any case
"""

import logging
import re
from typing import ClassVar

from ...utils.core.exceptions import ExtractorConfigurationError, OutOfBoundsError
from ..model.clock_time import ClockTime, MeridiemKind
from .base import compile_pattern
from .context import ExtractionContext

logger = logging.getLogger(__name__)

HOURS_GROUP = "hours"
MINUTES_GROUP = "minutes"
TIME_KIND_GROUP = "time_kind"


class DynamicTimeExtractor:
    """
    Builds a ClockTime from each match of a pattern with named capture groups.

    Matches whose captures cannot be parsed, or that describe an impossible
    time such as "17pm", are skipped. Results are deduplicated, keeping the
    order in which values first appear.
    """

    ALLOWED_GROUPS: ClassVar[frozenset[str]] = frozenset(
        {HOURS_GROUP, MINUTES_GROUP, TIME_KIND_GROUP}
    )
    REQUIRED_GROUPS: ClassVar[frozenset[str]] = frozenset({HOURS_GROUP, TIME_KIND_GROUP})

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        """
        Initialize the extractor.

        Args:
            pattern: Regular expression exposing the hours/minutes/time_kind groups

        Raises:
            ExtractorConfigurationError: If the pattern does not compile, is missing a
                required group, or declares a group outside the allowed set
        """
        self.pattern: re.Pattern[str] = compile_pattern(pattern)
        self._validate_groups(self.pattern)

    @classmethod
    def _validate_groups(cls, pattern: re.Pattern[str]) -> None:
        names = frozenset(pattern.groupindex)

        missing = cls.REQUIRED_GROUPS - names
        if missing:
            raise ExtractorConfigurationError(
                f"Pattern must contain all of the named capture groups {sorted(cls.REQUIRED_GROUPS)} "
                + f"but is missing {sorted(missing)}",
                context={"pattern": pattern.pattern},
            )

        unexpected = names - cls.ALLOWED_GROUPS
        if unexpected:
            raise ExtractorConfigurationError(
                f"Pattern may only contain named capture groups from {sorted(cls.ALLOWED_GROUPS)} "
                + f"but also contains {sorted(unexpected)}",
                context={"pattern": pattern.pattern},
            )

    def extract(self, text: str, context: ExtractionContext) -> list[ClockTime]:  # pyright: ignore[reportUnusedParameter]
        results: list[ClockTime] = []
        seen: set[ClockTime] = set()

        for match in self.pattern.finditer(text):
            clock_time = self._process_match(match)
            if clock_time is not None and clock_time not in seen:
                seen.add(clock_time)
                results.append(clock_time)

        return results

    @staticmethod
    def _process_match(match: re.Match[str]) -> ClockTime | None:
        hours = match.group(HOURS_GROUP)
        time_kind = match.group(TIME_KIND_GROUP)
        if hours is None or time_kind is None:
            return None

        minutes = (
            match.group(MINUTES_GROUP) if MINUTES_GROUP in match.re.groupindex else None
        )

        # Only "AM" and "PM" survive upper-casing; "Military" never does
        try:
            hour = int(hours)
            minute = int(minutes) if minutes is not None else 0
            kind = MeridiemKind(time_kind.strip().upper())
        except ValueError:
            logger.debug(f"Skipping unparsable time match {match.group(0)!r}")
            return None

        try:
            return ClockTime.of(hour, minute, kind)
        except OutOfBoundsError as e:
            logger.debug(f"Skipping time match {match.group(0)!r}: {e}")
            return None

    def __repr__(self) -> str:
        return f"DynamicTimeExtractor({self.pattern.pattern!r})"
