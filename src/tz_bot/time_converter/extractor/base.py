"""
The extraction capability shared by every extractor in TZ Bot.

An extractor scans a piece of text and returns the values it recognizes, in
the order they appear. Extractors are matched structurally against the
Extractor protocol; none of them inherit from a common base class.
"""

import re
from typing import Protocol, TypeVar

from ...utils.core.exceptions import ExtractorConfigurationError

C_contra = TypeVar("C_contra", contravariant=True)
R_co = TypeVar("R_co", covariant=True)


class Extractor(Protocol[C_contra, R_co]):
    """Protocol for anything that can pull values of type R out of text given a context C."""

    def extract(self, text: str, context: C_contra) -> list[R_co]: ...


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """
    Compile an extractor pattern, accepting already compiled patterns as-is.

    Raises:
        ExtractorConfigurationError: If the pattern is not a valid regular expression
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    try:
        return re.compile(pattern)
    except re.error as e:
        raise ExtractorConfigurationError(
            f"Failed to compile extractor pattern {pattern!r}: {e}"
        ) from e
