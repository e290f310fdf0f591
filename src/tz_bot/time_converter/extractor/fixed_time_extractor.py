"""Extractor for phrases that always mean the same time of day, such as "noon"."""

import re

from ..model.clock_time import ClockTime
from .base import compile_pattern
from .context import ExtractionContext


class FixedTimeExtractor:
    """
    Emits a constant ClockTime whenever its pattern occurs in the text.

    The value is emitted once per call no matter how many times the
    pattern matches.
    """

    def __init__(self, pattern: str | re.Pattern[str], value: ClockTime) -> None:
        self.pattern: re.Pattern[str] = compile_pattern(pattern)
        self.value: ClockTime = value

    def extract(self, text: str, context: ExtractionContext) -> list[ClockTime]:  # pyright: ignore[reportUnusedParameter]
        if self.pattern.search(text):
            return [self.value]
        return []

    def __repr__(self) -> str:
        return f"FixedTimeExtractor({self.pattern.pattern!r}, {self.value})"
