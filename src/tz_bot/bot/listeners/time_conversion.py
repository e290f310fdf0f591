"""
Time conversion listener for TZ Bot.

This module feeds every message the bot can see into the MessageHandler,
which replies with timezone conversions for any times it recognizes.
"""

import logging

import discord
from discord.ext import commands

from ...time_converter.message_handler import MessageHandler

logger = logging.getLogger(__name__)


class TimeConversionCog(commands.Cog):
    """Cog listening for messages that mention times of day."""

    def __init__(self, bot: commands.Bot, handler: MessageHandler) -> None:
        """
        Initialize the time conversion cog.

        Args:
            bot: The Discord bot instance
            handler: Message handler doing the extraction and reply
        """
        self.bot: commands.Bot = bot
        self.handler: MessageHandler = handler

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        """Pass an incoming message to the handler."""
        bot_user_id = self.bot.user.id if self.bot.user is not None else None
        await self.handler.handle_message(message, bot_user_id)


async def setup(bot: commands.Bot) -> None:
    """
    Setup function to add the cog to the bot.

    Args:
        bot: The Discord bot instance, which must expose a message_handler
    """
    handler = getattr(bot, "message_handler", None)
    if not isinstance(handler, MessageHandler):
        raise RuntimeError("Bot has no message handler; cannot set up time conversion")

    await bot.add_cog(TimeConversionCog(bot, handler))
