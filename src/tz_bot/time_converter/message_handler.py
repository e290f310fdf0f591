"""
Per-message time conversion pipeline for TZ Bot.

For every guild message the handler resolves the author's timezone from
their location role, runs all registered extractors over the text, and
replies with each detected time rendered in the configured destination
timezones. Every failure path ends in silence: the bot never posts errors
to chat.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

import discord

from ..config.schema import DestinationTimezoneConfig, TZBotConfig
from ..user_roles import UserRoleCache
from ..utils.core.exceptions import DirectoryFetchError
from ..utils.time.timezone import format_clock
from .extractor import (
    CurrentTimeExtractor,
    DynamicTimeExtractor,
    ExtractionContext,
    Extractor,
    FixedTimeExtractor,
    lift,
)
from .model.clock_time import ClockTime, MeridiemKind

logger = logging.getLogger(__name__)

TimeExtractor = Extractor[ExtractionContext, datetime]

MIDNIGHT_PATTERN = r"(?i:midnight)"
NOON_PATTERN = r"(?i:noon|midday)"
CURRENT_TIME_PATTERN = r"(?i:what\s+time\s+is\s+it\s+now|(?:current\s+time))"
CLOCK_TIME_PATTERN = (
    r"(?i:(?<!\w)(?P<hours>(?:1[012])|(?:0?[123456789]))\s*"
    + r"(?::\s*(?P<minutes>(?:[12345]\d)|(?:0\d)))?\s*(?P<time_kind>[ap]m)(?!\w))"
)

# Discord rejects message content longer than this
MAX_MESSAGE_LENGTH = 2000


def build_default_extractors() -> list[TimeExtractor]:
    """
    Build the stock set of extractors, lifted to produce UTC instants.

    Recognizes "midnight", "noon"/"midday", questions about the current
    time, and explicit 12-hour times such as "3pm" or "10:45 am".

    Raises:
        ExtractorConfigurationError: If one of the stock patterns is invalid
    """
    return [
        lift(FixedTimeExtractor(MIDNIGHT_PATTERN, ClockTime.of(0, 0, MeridiemKind.MILITARY))),
        lift(FixedTimeExtractor(NOON_PATTERN, ClockTime.of(12, 0, MeridiemKind.MILITARY))),
        lift(CurrentTimeExtractor(CURRENT_TIME_PATTERN)),
        lift(DynamicTimeExtractor(CLOCK_TIME_PATTERN)),
    ]


def unique_in_order(instants: Iterable[datetime]) -> list[datetime]:
    """Drop repeated instants, keeping the first occurrence of each."""
    seen: set[datetime] = set()
    result: list[datetime] = []
    for instant in instants:
        if instant not in seen:
            seen.add(instant)
            result.append(instant)
    return result


class MessageHandler:
    """
    Turns chat messages that mention times of day into conversion replies.

    The handler owns no Discord connection of its own: messages are passed
    in by the listener cog, roles come from the shared UserRoleCache, and
    replies go out through the message being answered.
    """

    def __init__(
        self,
        config: TZBotConfig,
        role_cache: UserRoleCache,
        extractors: Sequence[TimeExtractor] | None = None,
    ) -> None:
        """
        Initialize the message handler.

        Args:
            config: Bot configuration providing location roles and output timezones
            role_cache: Cache used to look up message authors' roles
            extractors: Lifted extractors to run (defaults to the stock set)
        """
        self.config: TZBotConfig = config
        self.role_cache: UserRoleCache = role_cache
        self.extractors: list[TimeExtractor] = (
            list(extractors) if extractors is not None else build_default_extractors()
        )
        self.input_timezones: dict[int, ZoneInfo] = config.role_timezones
        self.output_timezones: list[DestinationTimezoneConfig] = list(config.output.timezones)
        self.label_width: int = config.output.label_width

    def resolve_local_timezone(self, roles: Iterable[int]) -> ZoneInfo | None:
        """
        Find the timezone implied by a member's roles.

        Returns:
            The timezone of the single location role held, or None when the
            member holds no location role or more than one
        """
        timezones = [
            self.input_timezones[role_id] for role_id in roles if role_id in self.input_timezones
        ]

        if len(timezones) != 1:
            return None
        return timezones[0]

    def extract_times(self, text: str, context: ExtractionContext) -> list[datetime]:
        """Run every extractor over the text and return the distinct instants found."""
        return unique_in_order(
            instant
            for extractor in self.extractors
            for instant in extractor.extract(text, context)
        )

    def format_time(self, instant: datetime, destination: DestinationTimezoneConfig) -> str:
        """Render one output line, e.g. "US East : 10:00 AM EDT"."""
        return f"{destination.label:<{self.label_width}}: {format_clock(instant, destination.zone)}"

    def construct_responses(self, instants: Sequence[datetime]) -> list[str]:
        """
        Build the reply content for a list of instants.

        Each instant renders as one code block. Blocks are packed, in order,
        into as few messages as Discord's message length limit allows.

        Returns:
            The messages to send, empty if there is nothing to say
        """
        messages: list[str] = []
        current = ""

        for instant in instants:
            lines = "\n".join(
                self.format_time(instant, destination) for destination in self.output_timezones
            )
            block = f"```\n{lines}\n```"

            if current and len(current) + 1 + len(block) > MAX_MESSAGE_LENGTH:
                messages.append(current)
                current = block
            else:
                current = f"{current}\n{block}" if current else block

        if current:
            messages.append(current)

        return messages

    async def handle_message(self, message: discord.Message, bot_user_id: int | None = None) -> None:
        """
        Process one incoming message, replying if it mentions any times.

        Args:
            message: The message to process
            bot_user_id: ID of the bot's own user, whose messages are ignored
        """
        if message.author.bot or (bot_user_id is not None and message.author.id == bot_user_id):
            return

        guild = message.guild
        if guild is None:
            # Roles, and so timezones, only exist inside a guild
            return

        logger.debug(f"New message from {message.author.id} in guild {guild.id}: {message.content}")

        try:
            roles = await self.role_cache.roles(message.author.id, guild.id)
        except DirectoryFetchError as e:
            logger.warning(f"Could not resolve roles for user {message.author.id}: {e}")
            return

        local_timezone = self.resolve_local_timezone(roles)
        if local_timezone is None:
            logger.debug(
                f"User {message.author.id} does not hold exactly one location role; ignoring message"
            )
            return

        context = ExtractionContext.for_message(local_timezone, message.created_at)
        instants = self.extract_times(message.content, context)

        responses = self.construct_responses(instants)
        if not responses:
            return

        logger.debug(
            f"Replying to message {message.id} with {len(instants)} converted time(s)"
            + f" in {len(responses)} message(s)"
        )
        for content in responses:
            await self.reply(message, content)

    async def reply(self, message: discord.Message, content: str) -> None:
        """Send a reply referencing the message, logging rather than raising on failure."""
        try:
            _ = await message.reply(content, mention_author=False)
        except discord.HTTPException as e:
            logger.warning(f"Failed to send reply to message {message.id}: {e}")
