"""
Role update listener for TZ Bot.

Keeps the user role cache current by overwriting a member's cached roles
whenever Discord reports that the member changed.
"""

import logging

import discord
from discord.ext import commands

from ...user_roles import UserRoleCache

logger = logging.getLogger(__name__)


class RoleUpdateCog(commands.Cog):
    """Cog pushing member role changes into the role cache."""

    def __init__(self, bot: commands.Bot, role_cache: UserRoleCache) -> None:
        """
        Initialize the role update cog.

        Args:
            bot: The Discord bot instance
            role_cache: Cache to keep up to date
        """
        self.bot: commands.Bot = bot
        self.role_cache: UserRoleCache = role_cache

    @commands.Cog.listener()
    async def on_member_update(self, before: discord.Member, after: discord.Member) -> None:  # pyright: ignore[reportUnusedParameter]
        """Overwrite the cached roles of a member that was updated."""
        roles = [role.id for role in after.roles if not role.is_default()]
        logger.info(
            f"Received member update: username={after.name}, id={after.id}, roles={roles}"
        )
        await self.role_cache.update_roles(after.id, roles)


async def setup(bot: commands.Bot) -> None:
    """
    Setup function to add the cog to the bot.

    Args:
        bot: The Discord bot instance, which must expose a role_cache
    """
    role_cache = getattr(bot, "role_cache", None)
    if not isinstance(role_cache, UserRoleCache):
        raise RuntimeError("Bot has no role cache; cannot set up role updates")

    await bot.add_cog(RoleUpdateCog(bot, role_cache))
