"""
Command-line argument parsing for TZ Bot.

This module provides functionality for parsing command-line arguments
to configure custom paths for the config file and log folder.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    config_file: Path
    log_folder: Path


class DefaultPaths:
    """Default paths for TZ Bot."""

    CONFIG_FILE: Path = Path("config.yml")
    LOG_FOLDER: Path = Path("logs")


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    The file itself does not have to exist; without one the bot is
    configured from environment variables.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    # If the path exists, it must be a directory
    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for TZ Bot.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="tz-bot",
        description="TZ Bot - Discord bot converting times mentioned in chat between timezones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tz-bot
    Run with default paths

  BOT_TOKEN=... LOCATION_ROLES=Europe/London:775033844625047552 tz-bot
    Run without a config file, configured from the environment

  tz-bot --config-file /etc/tz-bot/config.yml --log-folder /var/log/tz-bot
    Use custom config file and log locations
""",
    )

    defaults = DefaultPaths()

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=str(defaults.CONFIG_FILE),
        help=(
            "Path to the configuration file (default: %(default)s). "
            "If it does not exist, BOT_TOKEN and LOCATION_ROLES are read from the environment."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=str(defaults.LOG_FOLDER),
        help=(
            "Path to the log folder for storing application logs (default: %(default)s). "
            "The directory will be created if it doesn't exist."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing or path validation fails, or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    try:
        # argparse guarantees these are strings
        config_file_str: str = getattr(parsed, "config_file", "")
        log_folder_str: str = getattr(parsed, "log_folder", "")

        config_file = validate_config_file_path(config_file_str)
        log_folder = validate_folder_path(log_folder_str, "log folder")
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(config_file=config_file, log_folder=log_folder)


def get_parsed_args(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse arguments and ensure the log directory exists.

    Returns:
        ParsedArgs containing validated paths with directories created

    Raises:
        SystemExit: If argument parsing fails
        OSError: If directory creation fails
    """
    parsed_args = parse_arguments(args)
    parsed_args.log_folder.mkdir(parents=True, exist_ok=True)
    return parsed_args
