"""
Global test configuration fixtures for TZ Bot tests.

This module provides reusable pytest fixtures for creating TZBotConfig
instances and the role cache plumbing shared by the time conversion tests.
All fixtures return properly typed and validated objects.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.tz_bot.config.schema import (
    DiscordConfig,
    LocationRoleConfig,
    ServicesConfig,
    TZBotConfig,
)
from src.tz_bot.time_converter.extractor import ExtractionContext
from src.tz_bot.user_roles import UserRoleCache
from tests.utils.test_helpers import StaticMemberDirectory

LONDON_ROLE_ID = 775033844625047552
NEW_YORK_ROLE_ID = 775033717419671602
LOS_ANGELES_ROLE_ID = 775033915060912169
UNRELATED_ROLE_ID = 123456789012345678

TEST_TOKEN = "test_discord_token_1234567890"


@pytest.fixture
def base_config() -> TZBotConfig:
    """
    Create a configuration with three location roles and default output.

    Returns:
        TZBotConfig: London, New York and Los Angeles location roles
    """
    return TZBotConfig(
        services=ServicesConfig(discord=DiscordConfig(token=TEST_TOKEN)),
        location_roles=[
            LocationRoleConfig(timezone="Europe/London", role_id=LONDON_ROLE_ID),
            LocationRoleConfig(timezone="America/New_York", role_id=NEW_YORK_ROLE_ID),
            LocationRoleConfig(
                timezone="America/Los_Angeles", role_id=LOS_ANGELES_ROLE_ID
            ),
        ],
    )


@pytest.fixture
def minimal_config() -> TZBotConfig:
    """
    Create a configuration with only the required fields set.

    Returns:
        TZBotConfig: No location roles, default output timezones
    """
    return TZBotConfig(
        services=ServicesConfig(discord=DiscordConfig(token=TEST_TOKEN)),
    )


@pytest.fixture
def member_directory() -> StaticMemberDirectory:
    """Create an in-memory member directory with no members."""
    return StaticMemberDirectory()


@pytest.fixture
def role_cache(member_directory: StaticMemberDirectory) -> UserRoleCache:
    """Create an empty role cache backed by the in-memory directory."""
    return UserRoleCache(member_directory)


@pytest.fixture
def london_context() -> ExtractionContext:
    """
    Create an extraction context for a message sent from London.

    The message was sent at 14:00 UTC on 1 July 2025, which is 3:00 PM BST.
    """
    return ExtractionContext.for_message(
        ZoneInfo("Europe/London"),
        datetime(2025, 7, 1, 14, 0, tzinfo=timezone.utc),
    )
