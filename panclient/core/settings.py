"""
Client settings for PANClient.

Connection settings are read from a YAML file in one of the standard
locations and then overridden by ``PANCLIENT_*`` environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..constants import DEFAULT_VALUES
from .exceptions import ConfigError
from .logging_utils import logger

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class ClientSettings:
    """Connection settings for one device."""

    _defaults: Dict[str, Any] = {
        "host": None,
        "api_key": None,
        "username": None,
        "password": None,
        "port": None,
        "verify_ssl": True,
        "timeout": DEFAULT_VALUES["TIMEOUT"],
        "vsys": DEFAULT_VALUES["VSYS"],
    }

    def __init__(self, **overrides):
        unknown = set(overrides) - set(self._defaults)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
        self._values = self._defaults.copy()
        self._values.update({name: value for name, value in overrides.items() if value is not None})

    def __getattr__(self, name):
        values = self.__dict__.get("_values", {})
        if name in values:
            return values[name]
        raise AttributeError(name)

    @classmethod
    def load(cls, config_file: Optional[str] = None, **overrides) -> "ClientSettings":
        """
        Load settings from file, environment and explicit overrides (in that order).

        Args:
            config_file: Explicit settings file; standard locations are searched when None
            **overrides: Values that win over file and environment

        Returns:
            ClientSettings

        Raises:
            ConfigError: If an explicit file is missing or any file is invalid
        """
        settings = cls()
        settings._load_from_file(config_file)
        settings._load_from_env()
        settings._values.update({name: value for name, value in overrides.items() if value is not None})
        return settings

    def _load_from_file(self, config_file: Optional[str] = None) -> None:
        """Load settings from a YAML file."""
        if config_file is None:
            possible_files = [
                Path.home() / ".panclient" / "config.yaml",
                Path.cwd() / ".panclient.yaml",
                Path("/etc/panclient/config.yaml"),
            ]
            for file_path in possible_files:
                if file_path.exists():
                    config_file = str(file_path)
                    break
            else:
                return
        elif not Path(config_file).exists():
            raise ConfigError(f"Settings file not found: {config_file}")

        try:
            with open(config_file, "r") as f:
                file_values = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load settings from {config_file}: {e}") from e

        if not isinstance(file_values, dict):
            raise ConfigError(f"Settings file {config_file} must contain a mapping")
        unknown = set(file_values) - set(self._defaults)
        if unknown:
            raise ConfigError(f"Unknown settings in {config_file}: {', '.join(sorted(unknown))}")
        self._values.update(file_values)
        logger.debug(f"Loaded settings from {config_file}")

    def _load_from_env(self) -> None:
        """Load settings from environment variables."""
        for name in self._defaults:
            env_name = f"PANCLIENT_{name.upper()}"
            if env_name not in os.environ:
                continue
            raw = os.environ[env_name]
            if name == "verify_ssl":
                lowered = raw.lower()
                if lowered in _TRUE_VALUES:
                    value = True
                elif lowered in _FALSE_VALUES:
                    value = False
                else:
                    # CA bundle path
                    value = raw
            elif name in ("timeout", "port"):
                try:
                    value = float(raw) if name == "timeout" else int(raw)
                except ValueError as e:
                    raise ConfigError(f"{env_name} must be a number, got '{raw}'") from e
            else:
                value = raw
            self._values[name] = value
            logger.debug(f"Setting '{name}' loaded from {env_name}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the settings with secrets masked."""
        return {
            name: ("********" if name in ("api_key", "password") and value else value)
            for name, value in self._values.items()
        }

    def __repr__(self):
        return f"ClientSettings({self.to_dict()!r})"
