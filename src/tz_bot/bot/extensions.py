"""
Extension management for TZ Bot.

This module contains utility functions for loading and unloading the bot's
event listener extensions (Cogs) with modern discord.py patterns and robust
error handling.
"""

import logging
import pkgutil
from pathlib import Path
from typing import NamedTuple

from discord.ext import commands

logger = logging.getLogger(__name__)


class ExtensionStatus(NamedTuple):
    """Status information for an extension."""

    name: str
    loaded: bool
    error: str | None = None


class ExtensionManager:
    """
    Extension manager for Discord bot Cogs.

    Provides dynamic extension discovery, robust error handling,
    and extension lifecycle tracking.
    """

    def __init__(self, package: str = f"{__package__}.listeners") -> None:
        """
        Initialize the extension manager.

        Args:
            package: Dotted name of the package extensions are discovered in
        """
        self.package: str = package
        self._loaded_extensions: set[str] = set()

    def discover_extensions(self) -> list[str]:
        """
        Dynamically discover all available listener extensions.

        Returns:
            List of extension module names
        """
        extensions: list[str] = []
        listeners_path = Path(__file__).parent / self.package.rsplit(".", 1)[-1]

        if not listeners_path.exists():
            logger.warning(f"Extension directory not found: {listeners_path}")
            return extensions

        for module_info in pkgutil.iter_modules([str(listeners_path)]):
            # Skip __init__.py and private modules
            if not module_info.name.startswith("_"):
                extensions.append(f"{self.package}.{module_info.name}")

        logger.debug(f"Discovered {len(extensions)} extensions: {extensions}")
        return sorted(extensions)

    async def load_extension_safe(
        self, bot: commands.Bot, extension_name: str
    ) -> ExtensionStatus:
        """
        Safely load a single extension with detailed error handling.

        Args:
            bot: The Discord bot instance
            extension_name: Name of the extension to load

        Returns:
            ExtensionStatus with load result
        """
        try:
            await bot.load_extension(extension_name)
            self._loaded_extensions.add(extension_name)
            logger.info(f"Successfully loaded extension: {extension_name}")
            return ExtensionStatus(extension_name, True)

        except commands.ExtensionAlreadyLoaded:
            logger.warning(f"Extension already loaded: {extension_name}")
            self._loaded_extensions.add(extension_name)
            return ExtensionStatus(extension_name, True)

        except commands.ExtensionNotFound as e:
            error_msg = f"Extension not found: {e}"
            logger.error(error_msg)
            return ExtensionStatus(extension_name, False, error_msg)

        except commands.NoEntryPointError as e:
            error_msg = f"No setup function found: {e}"
            logger.error(error_msg)
            return ExtensionStatus(extension_name, False, error_msg)

        except commands.ExtensionFailed as e:
            error_msg = f"Extension setup failed: {e}"
            logger.error(error_msg)
            return ExtensionStatus(extension_name, False, error_msg)

    async def unload_extension_safe(
        self, bot: commands.Bot, extension_name: str
    ) -> ExtensionStatus:
        """
        Safely unload a single extension.

        Args:
            bot: The Discord bot instance
            extension_name: Name of the extension to unload

        Returns:
            ExtensionStatus with unload result
        """
        try:
            await bot.unload_extension(extension_name)
            self._loaded_extensions.discard(extension_name)
            logger.info(f"Successfully unloaded extension: {extension_name}")
            return ExtensionStatus(extension_name, True)

        except commands.ExtensionNotLoaded:
            logger.warning(f"Extension not loaded: {extension_name}")
            # Consider it successful since it's not loaded
            return ExtensionStatus(extension_name, True)

        except commands.ExtensionNotFound as e:
            error_msg = f"Extension not found: {e}"
            logger.error(error_msg)
            return ExtensionStatus(extension_name, False, error_msg)

    def get_loaded_extensions(self) -> list[str]:
        """Get list of currently loaded extensions."""
        return sorted(self._loaded_extensions)


async def load_extensions(
    bot: commands.Bot, manager: ExtensionManager | None = None
) -> list[ExtensionStatus]:
    """
    Load all listener extensions for the bot with dynamic discovery.

    Args:
        bot: The Discord bot instance
        manager: Extension manager to track state in (a fresh one if omitted)

    Returns:
        List of ExtensionStatus for each extension
    """
    manager = manager or ExtensionManager()
    extensions = manager.discover_extensions()
    results: list[ExtensionStatus] = []

    logger.info(f"Loading {len(extensions)} extensions...")

    for extension in extensions:
        status = await manager.load_extension_safe(bot, extension)
        results.append(status)

    loaded_count = sum(1 for status in results if status.loaded)
    failed_count = len(results) - loaded_count

    logger.info(
        f"Extension loading complete: {loaded_count} loaded, {failed_count} failed"
    )

    if failed_count > 0:
        failed_names = [status.name for status in results if not status.loaded]
        logger.warning(f"Failed extensions: {failed_names}")

    return results


async def unload_extensions(
    bot: commands.Bot, manager: ExtensionManager
) -> list[ExtensionStatus]:
    """
    Unload every extension the manager has loaded.

    Args:
        bot: The Discord bot instance
        manager: Extension manager holding the loaded extensions

    Returns:
        List of ExtensionStatus for each extension
    """
    results: list[ExtensionStatus] = []

    for extension in manager.get_loaded_extensions():
        results.append(await manager.unload_extension_safe(bot, extension))

    logger.info(f"Unloaded {sum(1 for status in results if status.loaded)} extensions")
    return results
