"""
User role cache for TZ Bot.

Location roles are how members declare their timezone, so the bot needs the
role list of every message author. Role lists are fetched from Discord the
first time a user is seen and afterwards kept up to date by member update
events, so the common path never leaves the process.
"""

import asyncio
import logging
from typing import Protocol

import discord

from .utils.core.exceptions import DirectoryFetchError

logger = logging.getLogger(__name__)


class MemberDirectory(Protocol):
    """Protocol for anything that can look up a guild member's current roles."""

    async def get_member_roles(self, guild_id: int, user_id: int) -> list[int]: ...


class DiscordMemberDirectory:
    """Looks up guild member roles through the Discord HTTP API."""

    def __init__(self, client: discord.Client) -> None:
        """
        Initialize the directory.

        Args:
            client: The connected Discord client whose HTTP session is used
        """
        self.client: discord.Client = client

    async def get_member_roles(self, guild_id: int, user_id: int) -> list[int]:
        """
        Fetch the role IDs a member currently holds in a guild.

        Raises:
            DirectoryFetchError: If Discord rejects or fails the request
        """
        try:
            member = await self.client.http.get_member(guild_id, user_id)
        except discord.HTTPException as e:
            raise DirectoryFetchError(user_id, guild_id, e) from e

        return [int(role_id) for role_id in member.get("roles", [])]


class UserRoleCache:
    """
    In-memory map from user ID to that user's last known role IDs.

    Lookups never wait on one another. Writes take a lock only around the
    single dictionary update, never across a fetch, so a slow fetch for one
    user does not hold up anyone else.

    Concurrent lookups for the same uncached user may each fetch from the
    directory; the last one to finish wins. Fetches are idempotent, so this
    costs requests, not correctness.
    """

    def __init__(self, directory: MemberDirectory) -> None:
        """
        Initialize the cache.

        Args:
            directory: Where role lists are fetched from on a cache miss
        """
        self.directory: MemberDirectory = directory
        self._user_roles: dict[int, list[int]] = {}
        self._write_lock: asyncio.Lock = asyncio.Lock()

    def cached_roles(self, user_id: int) -> list[int] | None:
        """Get a copy of the cached role list for a user, or None if there is none."""
        roles = self._user_roles.get(user_id)
        return list(roles) if roles is not None else None

    async def update_roles(self, user_id: int, roles: list[int]) -> None:
        """Replace the cached role list for a user."""
        async with self._write_lock:
            self._user_roles[user_id] = list(roles)

    async def roles(self, user_id: int, guild_id: int) -> list[int]:
        """
        Get a user's role IDs, fetching them from the directory on a cache miss.

        Args:
            user_id: The user whose roles are wanted
            guild_id: The guild to look the user up in on a miss

        Returns:
            The user's role IDs

        Raises:
            DirectoryFetchError: If the roles were not cached and the fetch failed
        """
        cached = self.cached_roles(user_id)
        if cached is not None:
            return cached

        logger.debug(f"Role cache miss for user {user_id}, fetching from guild {guild_id}")
        try:
            fetched = await self.directory.get_member_roles(guild_id, user_id)
        except DirectoryFetchError:
            raise
        except Exception as e:
            raise DirectoryFetchError(user_id, guild_id, e) from e

        await self.update_roles(user_id, fetched)
        return list(fetched)

    def __len__(self) -> int:
        return len(self._user_roles)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._user_roles
