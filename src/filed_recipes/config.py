"""Configuration management for filed_recipes.

This module provides a centralized configuration system that supports:
- Default values for all settings
- Loading from TOML configuration files
- Environment variable overrides
- Validation of configuration values

Configuration priority (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FILED_RECIPES_*)
3. Project config file (.filed-recipes.toml)
4. User config file (~/.config/filed-recipes/config.toml)
5. Default values

Example:
    >>> config = StoreConfig.load()
    >>> config.update(recipes_file="my-recipes.txt")
    >>> config.save("~/.config/filed-recipes/config.toml")
"""

import codecs
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError

ENV_PREFIX = "FILED_RECIPES_"
TOML_SECTION = "filed-recipes"
PROJECT_CONFIG_NAME = ".filed-recipes.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StoreConfig:
    """Configuration for the recipe store and its command-line front-end.

    Attributes:
        recipes_file: Recipe file the CLI binds the store to
        encoding: Text encoding used to read and write the recipe file
        atomic_save: Write to a temporary file and rename it over the target
        log_level: Logging level name for the CLI
        log_file: Optional log file; logs go to stderr when unset

    Example:
        >>> config = StoreConfig(encoding="latin-1")
        >>> config.atomic_save
        True
    """

    recipes_file: Path = field(default_factory=lambda: Path("recipes.txt"))
    encoding: str = "utf-8"
    atomic_save: bool = True

    # Logging settings
    log_level: str = "WARNING"
    log_file: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid
        """
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigurationError(
                f"Unknown text encoding: {self.encoding}",
                encoding=str(self.encoding),
            ) from e

        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                log_level=str(self.log_level),
                valid_levels=", ".join(LOG_LEVELS),
            )
        self.log_level = self.log_level.upper()

        if not isinstance(self.atomic_save, bool):
            raise ConfigurationError(
                "atomic_save must be true or false",
                atomic_save=str(self.atomic_save),
            )

        # Paths may arrive as str from config files or the environment
        if not isinstance(self.recipes_file, Path):
            self.recipes_file = Path(self.recipes_file)
        if not str(self.recipes_file).strip():
            raise ConfigurationError("recipes_file must not be empty")

        if self.log_file is not None and not isinstance(self.log_file, Path):
            self.log_file = Path(self.log_file)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for :attr:`log_level`."""
        return logging.getLevelName(self.log_level)

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        load_user_config: bool = True,
        load_env: bool = True,
    ) -> "StoreConfig":
        """Load configuration from file(s) and environment variables.

        Configuration is loaded in this order (later overrides earlier):
        1. Default values
        2. User config file (~/.config/filed-recipes/config.toml)
        3. Project config file (.filed-recipes.toml or specified path)
        4. Environment variables (FILED_RECIPES_*)

        Args:
            config_path: Path to project config file (optional)
            load_user_config: Whether to load user config file
            load_env: Whether to load environment variables

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationError: If configuration is invalid or an explicit
                config_path does not exist
        """
        config_dict: dict[str, Any] = {}

        if load_user_config:
            user_config_path = Path.home() / ".config" / "filed-recipes" / "config.toml"
            if user_config_path.exists():
                config_dict.update(cls._load_toml(user_config_path))

        if config_path:
            project_path = Path(config_path).expanduser()
            if not project_path.exists():
                raise ConfigurationError(
                    "Configuration file not found",
                    path=str(project_path),
                )
            config_dict.update(cls._load_toml(project_path))
        else:
            default_path = Path(PROJECT_CONFIG_NAME)
            if default_path.exists():
                config_dict.update(cls._load_toml(default_path))

        if load_env:
            config_dict.update(cls._load_env())

        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys",
                keys=", ".join(sorted(unknown)),
            )

        return cls(**config_dict)

    @staticmethod
    def _load_toml(path: Path) -> dict[str, Any]:
        """Load configuration from TOML file.

        Args:
            path: Path to TOML file

        Returns:
            Dictionary of configuration values

        Raises:
            ConfigurationError: If TOML file is invalid
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {path}",
                path=str(path),
                error=str(e),
            ) from e

        if TOML_SECTION in data:
            return data[TOML_SECTION]
        return data

    @staticmethod
    def _load_env() -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables are prefixed with FILED_RECIPES_ and use
        uppercase snake_case. For example:
        - FILED_RECIPES_RECIPES_FILE=~/recipes.txt
        - FILED_RECIPES_ENCODING=latin-1
        - FILED_RECIPES_ATOMIC_SAVE=false

        Returns:
            Dictionary of configuration values from environment
        """
        config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            config_key = key[len(ENV_PREFIX) :].lower()

            if value.lower() in ("true", "yes"):
                config[config_key] = True
            elif value.lower() in ("false", "no"):
                config[config_key] = False
            else:
                config[config_key] = value

        return config

    def save(self, path: str | Path) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save configuration file

        Raises:
            ConfigurationError: If save fails
        """
        import tomli_w

        path = Path(path).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                tomli_w.dump({TOML_SECTION: self.to_dict()}, f)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to save configuration to {path}",
                path=str(path),
                error=str(e),
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a TOML-friendly dictionary.

        Paths become strings and unset optional values are left out.
        """
        result: dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if value is None:
                continue
            if isinstance(value, Path):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    def update(self, **kwargs: Any) -> None:
        """Update configuration values.

        Args:
            **kwargs: Configuration values to update

        Raises:
            ConfigurationError: If updated values are invalid
        """
        for key, value in kwargs.items():
            if hasattr(self, key) and key in self.__dataclass_fields__:
                setattr(self, key, value)
            else:
                raise ConfigurationError(
                    f"Unknown configuration key: {key}",
                    key=key,
                    valid_keys=", ".join(self.__dataclass_fields__.keys()),
                )

        self._validate()
