"""Configuration manager for TZ Bot.

This module provides functionality for loading and validating YAML
configuration files with Pydantic model validation and applying environment
variable overrides.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from .schema import LocationRoleConfig, TZBotConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager for handling YAML config files with Pydantic validation.

    Provides methods for loading and validating configuration from a YAML file
    and/or the environment.
    """

    @staticmethod
    def load_config(
        config_path: Path, environ: Mapping[str, str] | None = None
    ) -> TZBotConfig:
        """
        Load and validate configuration from a YAML file.

        BOT_TOKEN and LOCATION_ROLES environment variables, when set, take
        precedence over the corresponding file values.

        Args:
            config_path: Path to the YAML configuration file
            environ: Environment to read overrides from (defaults to os.environ)

        Returns:
            TZBotConfig: Validated configuration object

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValidationError: If the configuration fails Pydantic validation
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            config_data: dict[str, object] = {}
        elif isinstance(raw_config_data, dict):
            config_data = raw_config_data  # pyright: ignore[reportUnknownVariableType]
        else:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )

        parsed_data = ConfigManager._apply_environment(
            config_data, os.environ if environ is None else environ
        )

        return TZBotConfig(**parsed_data)  # pyright: ignore[reportArgumentType]

    @staticmethod
    def load_from_environment(environ: Mapping[str, str] | None = None) -> TZBotConfig:
        """
        Build the configuration purely from environment variables.

        Args:
            environ: Environment to read from (defaults to os.environ)

        Raises:
            ValidationError: If BOT_TOKEN is missing or the result is invalid
        """
        return TZBotConfig(
            **ConfigManager._apply_environment(  # pyright: ignore[reportArgumentType]
                {}, os.environ if environ is None else environ
            )
        )

    @staticmethod
    def _apply_environment(
        config_data: dict[str, object], environ: Mapping[str, str]
    ) -> dict[str, object]:
        """
        Overlay environment variable values onto raw configuration data.

        Args:
            config_data: Raw configuration data from YAML
            environ: Environment variables

        Returns:
            dict[str, object]: Configuration data with overrides applied
        """
        parsed_data = config_data.copy()

        for key, value in environ.items():
            match key:
                case "BOT_TOKEN" if value:
                    services = parsed_data.get("services")
                    services_data: dict[str, object] = (
                        dict(services) if isinstance(services, dict) else {}  # pyright: ignore[reportUnknownArgumentType]
                    )
                    discord_section = services_data.get("discord")
                    discord_data: dict[str, object] = (
                        dict(discord_section) if isinstance(discord_section, dict) else {}  # pyright: ignore[reportUnknownArgumentType]
                    )
                    discord_data["token"] = value
                    services_data["discord"] = discord_data
                    parsed_data["services"] = services_data
                    logger.debug("Discord token taken from BOT_TOKEN")

                case "LOCATION_ROLES" if value:
                    parsed_data["location_roles"] = [
                        location_role.model_dump()
                        for location_role in ConfigManager.parse_location_roles(value)
                    ]
                    logger.debug(f"Location roles taken from LOCATION_ROLES: {value}")

                case _:
                    pass

        return parsed_data

    @staticmethod
    def parse_location_roles(text: str) -> list[LocationRoleConfig]:
        """
        Parse a comma separated list of timezone:role_id pairs.

        Entries that are malformed, name an unknown timezone, or repeat an
        earlier role ID are skipped with a warning.

        Args:
            text: e.g. "Europe/London:775033844625047552,America/New_York:775033717419671602"

        Returns:
            list[LocationRoleConfig]: Parsed location roles in input order
        """
        location_roles: list[LocationRoleConfig] = []
        seen_role_ids: set[int] = set()

        for entry in text.split(","):
            entry = entry.strip()
            if not entry:
                continue

            timezone, separator, role_id = entry.partition(":")
            if not separator:
                logger.warning(f"Ignoring location role without a role ID: {entry!r}")
                continue

            try:
                location_role = LocationRoleConfig(
                    timezone=timezone.strip(), role_id=int(role_id.strip())
                )
            except (ValueError, ValidationError) as e:
                logger.warning(f"Ignoring invalid location role {entry!r}: {e}")
                continue

            if location_role.role_id in seen_role_ids:
                logger.warning(f"Ignoring duplicate location role ID: {location_role.role_id}")
                continue

            seen_role_ids.add(location_role.role_id)
            location_roles.append(location_role)

        return location_roles

