"""Per-message context handed to every time extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from ...utils.time.timezone import ensure_timezone_aware, get_utc_now
from ..model.clock_time import ClockTime


@dataclass(frozen=True)
class ExtractionContext:
    """
    What extractors know about the message being processed.

    Attributes:
        local_timezone: The author's timezone, resolved from their location role
        message_clock_time: When the message was sent, on the author's local clock
        reference_time: The instant "today" is taken from when anchoring clock values
    """

    local_timezone: ZoneInfo
    message_clock_time: ClockTime
    reference_time: datetime = field(default_factory=get_utc_now)

    @classmethod
    def for_message(cls, local_timezone: ZoneInfo, sent_at: datetime) -> ExtractionContext:
        """
        Build the context for a message sent at the given instant.

        The send time is converted into the local timezone to obtain the
        message clock time and is also used as the reference for "today".
        """
        aware_sent_at = ensure_timezone_aware(sent_at)
        local_sent_at = aware_sent_at.astimezone(local_timezone)
        return cls(
            local_timezone=local_timezone,
            message_clock_time=ClockTime.from_time(local_sent_at.time()),
            reference_time=aware_sent_at,
        )
