"""Configuration schema for TZ Bot using nested Pydantic models."""

from typing import Annotated, ClassVar
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.time.timezone import get_timezone, is_valid_timezone


def _validate_timezone_key(v: str) -> str:
    if not is_valid_timezone(v):
        raise ValueError(f"Unknown IANA timezone: {v}")
    return v


class DiscordConfig(BaseModel):
    """Discord service configuration."""

    token: str = Field(
        ...,
        description="Discord bot token",
        min_length=1,
    )

    @field_validator("token")
    @classmethod
    def validate_discord_token(cls, v: str) -> str:
        """Validate Discord token format."""
        if len(v) < 10:
            raise ValueError("Discord token appears to be too short")
        return v


class ServicesConfig(BaseModel):
    """External services configuration."""

    discord: DiscordConfig


class LocationRoleConfig(BaseModel):
    """A guild role that marks its members as living in a timezone."""

    timezone: str = Field(
        ...,
        description="IANA timezone key for members holding this role (e.g., Europe/London)",
    )
    role_id: int = Field(
        ...,
        description="Discord role ID",
        gt=0,
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is a known IANA key."""
        return _validate_timezone_key(v)

    @property
    def zone(self) -> ZoneInfo:
        """The ZoneInfo for this role's timezone."""
        return get_timezone(self.timezone)


class DestinationTimezoneConfig(BaseModel):
    """A timezone every detected time is rendered in."""

    label: str = Field(
        ...,
        description="Label shown in front of the converted time",
        min_length=1,
    )
    timezone: str = Field(
        ...,
        description="IANA timezone key",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is a known IANA key."""
        return _validate_timezone_key(v)

    @property
    def zone(self) -> ZoneInfo:
        """The ZoneInfo for this destination."""
        return get_timezone(self.timezone)


def _default_output_timezones() -> list[DestinationTimezoneConfig]:
    return [
        DestinationTimezoneConfig(label="UK", timezone="Europe/London"),
        DestinationTimezoneConfig(label="US East", timezone="America/New_York"),
        DestinationTimezoneConfig(label="US West", timezone="America/Los_Angeles"),
    ]


class OutputConfig(BaseModel):
    """Reply rendering configuration."""

    timezones: list[DestinationTimezoneConfig] = Field(
        default_factory=_default_output_timezones,
        description="Ordered list of timezones each detected time is shown in",
        min_length=1,
    )
    label_width: Annotated[int, Field(ge=1, le=32)] = Field(
        default=8,
        description="Width the timezone labels are left-aligned to",
    )


class TZBotConfig(BaseModel):
    """
    Configuration model for TZ Bot with nested structure.

    This model defines all configuration options with validation,
    type hints, and default values using a modern nested approach.
    """

    services: ServicesConfig
    location_roles: list[LocationRoleConfig] = Field(
        default_factory=list,
        description="Guild roles that determine a member's local timezone",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )

    @field_validator("location_roles")
    @classmethod
    def validate_unique_roles(cls, v: list[LocationRoleConfig]) -> list[LocationRoleConfig]:
        """Reject configurations that map one role to more than one timezone."""
        seen: set[int] = set()
        for location_role in v:
            if location_role.role_id in seen:
                raise ValueError(f"Duplicate location role ID: {location_role.role_id}")
            seen.add(location_role.role_id)
        return v

    @property
    def role_timezones(self) -> dict[int, ZoneInfo]:
        """Map of location role ID to timezone."""
        return {
            location_role.role_id: location_role.zone
            for location_role in self.location_roles
        }
