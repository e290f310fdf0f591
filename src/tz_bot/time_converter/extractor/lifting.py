"""
Composition of time extractors.

Every concrete extractor produces ClockTime values. The message handler needs
absolute UTC instants, so extractors are lifted in two explicit stages when
they are registered:

1. lift_to_bare_clock: ClockTime -> datetime.time (24-hour, tag dropped)
2. lift_to_instant: datetime.time -> aware UTC datetime, anchored to today's
   date in the context's local timezone

Clock values that do not exist, or exist twice, on that date in that timezone
are dropped here and nowhere else.
"""

import logging
from datetime import datetime, time

from ...utils.time.timezone import combine_local, local_date, to_utc
from ..model.clock_time import ClockTime
from .base import Extractor
from .context import ExtractionContext

logger = logging.getLogger(__name__)


class BareClockExtractor:
    """Adapter turning a ClockTime extractor into one producing bare clock values."""

    def __init__(self, inner: Extractor[ExtractionContext, ClockTime]) -> None:
        self.inner: Extractor[ExtractionContext, ClockTime] = inner

    def extract(self, text: str, context: ExtractionContext) -> list[time]:
        return [clock_time.to_time() for clock_time in self.inner.extract(text, context)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"


class InstantExtractor:
    """Adapter turning a bare clock extractor into one producing UTC instants."""

    def __init__(self, inner: Extractor[ExtractionContext, time]) -> None:
        self.inner: Extractor[ExtractionContext, time] = inner

    def extract(self, text: str, context: ExtractionContext) -> list[datetime]:
        today = local_date(context.reference_time, context.local_timezone)
        instants: list[datetime] = []

        for clock in self.inner.extract(text, context):
            local_dt = combine_local(today, clock, context.local_timezone)
            if local_dt is None:
                logger.debug(
                    f"Dropping {clock} on {today}: not a single instant in {context.local_timezone.key}"
                )
                continue
            instants.append(to_utc(local_dt))

        return instants

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"


def lift_to_bare_clock(
    extractor: Extractor[ExtractionContext, ClockTime],
) -> Extractor[ExtractionContext, time]:
    """Lift a ClockTime extractor to one producing 24-hour bare clock values."""
    return BareClockExtractor(extractor)


def lift_to_instant(
    extractor: Extractor[ExtractionContext, time],
) -> Extractor[ExtractionContext, datetime]:
    """Lift a bare clock extractor to one producing absolute UTC instants."""
    return InstantExtractor(extractor)


def lift(
    extractor: Extractor[ExtractionContext, ClockTime],
) -> Extractor[ExtractionContext, datetime]:
    """Apply both lifting stages to a ClockTime extractor."""
    return lift_to_instant(lift_to_bare_clock(extractor))
