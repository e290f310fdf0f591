"""Text extractors that recognize times of day in chat messages."""

from .base import Extractor, compile_pattern
from .context import ExtractionContext
from .current_time_extractor import CurrentTimeExtractor
from .dynamic_time_extractor import DynamicTimeExtractor
from .fixed_time_extractor import FixedTimeExtractor
from .lifting import lift, lift_to_bare_clock, lift_to_instant

__all__ = [
    "Extractor",
    "compile_pattern",
    "ExtractionContext",
    "CurrentTimeExtractor",
    "DynamicTimeExtractor",
    "FixedTimeExtractor",
    "lift",
    "lift_to_bare_clock",
    "lift_to_instant",
]
