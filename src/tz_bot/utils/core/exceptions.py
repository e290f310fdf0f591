"""
Basic exception classes for TZ Bot.

This module contains fundamental exception classes that are used throughout
the codebase without creating import cycles.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...time_converter.model.clock_time import MeridiemKind


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    API = "api"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class TZBotError(Exception):
    """Base exception class for TZ Bot specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.context: object | None = context
        self.recoverable: bool = recoverable


class APIError(TZBotError):
    """API-related errors (Discord API)."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.API,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            recoverable=recoverable,
        )


class ValidationError(TZBotError):
    """Input validation errors."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            recoverable=False,
            context=context,
        )


class ConfigurationError(TZBotError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            context=context,
        )


class OutOfBoundsError(ValidationError):
    """A clock time component fell outside the range allowed for its meridiem kind."""

    def __init__(self, hour: int, minute: int, kind: MeridiemKind) -> None:
        super().__init__(
            f"Time component value out of bounds. Actual value was {hour}:{minute} {kind}.",
            context={"hour": hour, "minute": minute, "kind": kind},
        )
        self.hour: int = hour
        self.minute: int = minute
        self.kind: MeridiemKind = kind


class ExtractorConfigurationError(ConfigurationError):
    """An extractor was built with a pattern it cannot work with."""

    pass


class DirectoryFetchError(APIError):
    """Fetching a guild member's roles from Discord failed."""

    def __init__(self, user_id: int, guild_id: int, cause: BaseException) -> None:
        super().__init__(
            f"Failed to fetch a member with ID [{user_id}] from the guild with ID [{guild_id}]. Caused by: {cause!r}",
            context={"user_id": user_id, "guild_id": guild_id},
        )
        self.user_id: int = user_id
        self.guild_id: int = guild_id
        self.cause: BaseException = cause
