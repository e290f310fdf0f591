"""
Main entry point for TZ Bot.

This module initializes the bot, loads configuration, sets up logging,
loads listener extensions, manages the main event loop, and handles overall
bot lifecycle and error management.
"""

import asyncio
import logging
import logging.handlers
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing_extensions import override

import discord
from discord.ext import commands

from .bot.extensions import ExtensionManager, load_extensions, unload_extensions
from .config.manager import ConfigManager
from .config.schema import TZBotConfig
from .time_converter.message_handler import MessageHandler
from .user_roles import DiscordMemberDirectory, UserRoleCache
from .utils.cli.args import get_parsed_args

LOG_FILES = ("tz-bot.log", "tz-bot-errors.log")


def rotate_logs_on_startup(logs_dir: Path) -> None:
    """
    Rotate existing log files on startup with timestamp-based naming.

    This function checks for existing log files and renames them with
    timestamps to create a clean start for the new session.

    Args:
        logs_dir: Directory containing log files
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    for log_file in LOG_FILES:
        log_path = logs_dir / log_file
        if log_path.exists():
            backup_path = logs_dir / f"{log_file}.{timestamp}"
            try:
                _ = log_path.rename(backup_path)
                print(f"Rotated {log_file} to {backup_path.name}")
            except OSError as e:
                print(f"Warning: Failed to rotate {log_file}: {e}")


def cleanup_old_logs(logs_dir: Path, max_files: int = 10) -> None:
    """
    Clean up old timestamped log files, keeping only the most recent ones.

    Args:
        logs_dir: Directory containing log files
        max_files: Maximum number of timestamped log files to keep per type
    """
    for log_type in LOG_FILES:
        timestamped_files = [
            file_path
            for file_path in logs_dir.glob(f"{log_type}.*")
            if file_path.name != log_type
        ]

        # Newest first
        timestamped_files.sort(key=lambda x: x.stat().st_mtime, reverse=True)

        for file_path in timestamped_files[max_files:]:
            try:
                file_path.unlink()
                print(f"Cleaned up old log file: {file_path.name}")
            except OSError as e:
                print(f"Warning: Failed to remove {file_path.name}: {e}")


def setup_logging(logs_dir: Path) -> None:
    """
    Configure logging with rotation and multiple handlers.

    Sets up both file and console logging with appropriate formatters,
    startup-based and size-based log rotation, and different log levels
    for different components.

    Args:
        logs_dir: Directory log files are written to
    """
    _ = logs_dir.mkdir(exist_ok=True, parents=True)

    rotate_logs_on_startup(logs_dir)
    cleanup_old_logs(logs_dir, max_files=10)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    # File handler with rotation (5MB max, keep 5 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "tz-bot.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(simple_formatter)

    error_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "tz-bot-errors.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(error_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.http").setLevel(logging.WARNING)
    logging.getLogger("discord.gateway").setLevel(logging.INFO)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


class TZBot(commands.Bot):
    """
    TZ Bot - Discord bot converting times mentioned in chat between timezones.

    Members declare where they live with location roles. When a member
    mentions a time of day, the bot replies with that time in each of the
    configured destination timezones.
    """

    def __init__(self, config: TZBotConfig) -> None:
        """Initialize the bot with required intents and configuration."""
        intents = discord.Intents.default()
        # Privileged: reading message text and receiving member role updates
        intents.message_content = True
        intents.members = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.config: TZBotConfig = config
        self.role_cache: UserRoleCache = UserRoleCache(DiscordMemberDirectory(self))
        self.message_handler: MessageHandler = MessageHandler(config, self.role_cache)
        self.extension_manager: ExtensionManager = ExtensionManager()
        self._is_shutting_down: bool = False

    def is_shutting_down(self) -> bool:
        """Check if the bot is currently shutting down."""
        return self._is_shutting_down

    @override
    async def setup_hook(self) -> None:
        """
        Setup hook called when the bot is starting up.

        Loads the listener extensions. The bot is useless without them, so
        a failure here aborts startup.
        """
        logger.info("Setting up TZ Bot...")

        results = await load_extensions(self, self.extension_manager)
        failed = [status for status in results if not status.loaded]
        if failed:
            for status in failed:
                logger.error(f"  - {status.name}: {status.error}")
            raise RuntimeError("Bot setup failed: Extension loading failed")

        logger.info(
            f"Watching {len(self.config.location_roles)} location role(s), "
            + f"replying in {len(self.config.output.timezones)} timezone(s)"
        )
        logger.info("TZ Bot setup complete")

    async def on_ready(self) -> None:
        """Called when the bot has successfully connected to Discord."""
        if self.user is None:
            logger.error("Bot user is None after ready event")
            return

        logger.info(f"TZ Bot is ready! Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    @override
    async def on_error(self, event_method: str, /, *args: object, **kwargs: object) -> None:
        """
        Handle errors that occur during event processing.

        Logs the exception and keeps the bot running.
        """
        logger.exception(f"Unhandled exception in event '{event_method}' with args: {args}")

        if kwargs:
            logger.error(f"Event kwargs: {kwargs}")

    async def on_disconnect(self) -> None:
        """Called when the bot disconnects from Discord."""
        logger.warning("Bot disconnected from Discord")

    async def on_resumed(self) -> None:
        """Called when the bot resumes a session."""
        logger.info("Bot session resumed")

    @override
    async def close(self) -> None:
        """
        Clean shutdown of the bot.

        Unloads extensions and closes the Discord connection.
        """
        if self._is_shutting_down:
            logger.debug("Shutdown already in progress, skipping duplicate close")
            return

        self._is_shutting_down = True
        logger.info("Initiating graceful shutdown of TZ Bot...")

        try:
            _ = await unload_extensions(self, self.extension_manager)
            await super().close()
            logger.info("TZ Bot shutdown complete")

        except Exception as e:
            logger.exception(f"Error during bot shutdown: {e}")
            # Still call parent close to ensure Discord connection is terminated
            try:
                await super().close()
            except Exception:
                logger.exception(
                    "Failed to close Discord connection during error recovery"
                )


def setup_signal_handlers(bot: TZBot) -> None:
    """
    Setup signal handlers for graceful shutdown.

    Handles SIGTERM and SIGINT signals to ensure the bot shuts down gracefully
    when receiving termination signals from the operating system.
    """

    def signal_handler(signum: int, _frame: object) -> None:
        """Handle shutdown signals."""
        signal_name = signal.Signals(signum).name
        logger.info(f"Received {signal_name} signal, initiating graceful shutdown...")

        loop = asyncio.get_event_loop()
        if loop.is_running():
            _ = loop.create_task(bot.close())
        else:
            logger.warning("Event loop not running, forcing immediate shutdown")
            sys.exit(1)

    _ = signal.signal(signal.SIGTERM, signal_handler)
    _ = signal.signal(signal.SIGINT, signal_handler)

    logger.debug("Signal handlers registered for graceful shutdown")


def load_configuration(config_path: Path) -> TZBotConfig:
    """
    Load the configuration from a YAML file, or from the environment if there is none.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        The validated configuration
    """
    if config_path.exists():
        config = ConfigManager.load_config(config_path)
        logger.info(f"Configuration loaded from {config_path}")
    else:
        logger.info(f"Configuration file '{config_path}' not found, using environment variables")
        config = ConfigManager.load_from_environment()

    if not config.location_roles:
        logger.warning("No location roles configured; the bot will never reply")

    return config


async def main() -> None:
    """
    Main entry point for the TZ Bot application.

    This function sets up logging, loads configuration, creates the bot instance,
    sets up signal handlers, and starts the bot with comprehensive error handling.
    """
    parsed_args = get_parsed_args()

    setup_logging(parsed_args.log_folder)
    logger.info("TZ Bot starting up...")

    bot: TZBot | None = None

    try:
        try:
            config = load_configuration(parsed_args.config_file)
        except Exception as e:
            logger.exception(f"Failed to load configuration: {e}")
            logger.error("Please check your config.yml file or BOT_TOKEN/LOCATION_ROLES")
            sys.exit(1)

        # Extractor patterns are validated here; a bad one stops startup
        try:
            bot = TZBot(config)
            logger.info("Bot instance created successfully")
        except Exception as e:
            logger.exception(f"Failed to create bot instance: {e}")
            sys.exit(1)

        setup_signal_handlers(bot)

        logger.info("Starting TZ Bot...")
        try:
            await bot.start(config.services.discord.token)
        except discord.LoginFailure as e:
            logger.error(f"Failed to login to Discord: {e}")
            logger.error("Please check your Discord bot token")
            sys.exit(1)
        except discord.PrivilegedIntentsRequired as e:
            logger.error(f"Missing privileged intents: {e}")
            logger.error(
                "Enable the Message Content and Server Members intents in the Discord Developer Portal"
            )
            sys.exit(1)
        except discord.HTTPException as e:
            logger.error(f"HTTP error connecting to Discord: {e}")
            logger.error(
                "This may be a temporary Discord API issue, please try again later"
            )
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except SystemExit:
        # Re-raise SystemExit to preserve exit codes
        raise
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        sys.exit(1)
    finally:
        if bot is not None and not bot.is_shutting_down():
            logger.info("Ensuring bot shutdown in finally block...")
            try:
                await bot.close()
            except Exception as e:
                logger.exception(f"Error during final bot cleanup: {e}")

        logger.info("TZ Bot shutdown complete")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
