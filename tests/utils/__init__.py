"""
Test utilities package for TZ Bot tests.

### test_helpers.py
- `StaticMemberDirectory`: In-memory member directory with call recording
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `create_mock_message()`: Mock Discord message with an AsyncMock reply
- `create_mock_member()`: Mock guild member holding a set of roles
"""

from __future__ import annotations

from .test_helpers import (
    StaticMemberDirectory,
    create_mock_guild,
    create_mock_member,
    create_mock_message,
    create_mock_role,
    create_temp_config_file,
)

__all__ = [
    "StaticMemberDirectory",
    "create_mock_guild",
    "create_mock_member",
    "create_mock_message",
    "create_mock_role",
    "create_temp_config_file",
]
