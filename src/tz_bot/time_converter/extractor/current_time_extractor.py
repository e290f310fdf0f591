"""Extractor for questions about the current time, such as "what time is it now"."""

import re

from ..model.clock_time import ClockTime
from .base import compile_pattern
from .context import ExtractionContext


class CurrentTimeExtractor:
    """
    Emits the time the message was sent, on the author's local clock,
    whenever its pattern occurs in the text. At most one value per call.
    """

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        self.pattern: re.Pattern[str] = compile_pattern(pattern)

    def extract(self, text: str, context: ExtractionContext) -> list[ClockTime]:
        if self.pattern.search(text):
            return [context.message_clock_time]
        return []

    def __repr__(self) -> str:
        return f"CurrentTimeExtractor({self.pattern.pattern!r})"
