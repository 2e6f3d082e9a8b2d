"""Configuration loader that merges ENV → YAML → Defaults."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.config.schemas import AppConfig
from prompt_relay.core.exceptions import ConfigError
from prompt_relay.utils.logging import get_logger

logger = get_logger("config.loader")


class ConfigLoader:
    """Loads and merges configuration from multiple sources.

    Priority order (highest to lowest):
    1. Environment variables with the ``RELAY_`` prefix
    2. YAML configuration files, later files winning
    3. Schema defaults

    Provider credentials are not part of the configuration; they are read from
    the environment each time a request is dispatched.
    """

    def __init__(
        self,
        config_paths: list[Path] | None = None,
        env_manager: EnvManager | None = None,
    ):
        self.config_paths = [Path(p) for p in (config_paths or [])]
        self.env_manager = env_manager or EnvManager()

    def load_config(self) -> AppConfig:
        """Load and merge configuration from all sources.

        Raises:
            ConfigError: If configuration is invalid or files don't exist
        """
        logger.debug("Loading configuration from multiple sources")
        config_data: dict[str, Any] = {}

        for config_path in self.config_paths:
            yaml_data = self._load_yaml_file(config_path)
            config_data = self._deep_merge(config_data, yaml_data)
            logger.debug(f"Merged YAML config from {config_path}")

        env_data = self.env_manager.get_config_from_env()
        if env_data:
            config_data = self._deep_merge(config_data, env_data)
            logger.debug(f"Merged {len(env_data)} environment sections")

        try:
            config = AppConfig.from_dict(config_data)
        except (ValidationError, TypeError) as e:
            error_msg = f"Invalid configuration: {e}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e

        logger.info("Configuration loaded and validated successfully")
        return config

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load YAML file and return as dictionary.

        Raises:
            ConfigError: If file doesn't exist or is invalid YAML
        """
        if not file_path.exists():
            error_msg = f"Config file not found: {file_path}"
            logger.error(error_msg)
            raise ConfigError(error_msg)

        try:
            with open(file_path, encoding="utf-8") as file:
                config_data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

        if config_data is None:
            logger.warning(f"YAML file {file_path} is empty, using empty dict")
            return {}
        if not isinstance(config_data, dict):
            raise ConfigError(
                f"Config file {file_path} must contain a mapping, got {type(config_data).__name__}"
            )
        return config_data

    def _deep_merge(
        self, base: dict[str, Any], override: dict[str, Any]
    ) -> dict[str, Any]:
        """Recursively merge ``override`` into ``base``; override values win."""
        merged = base.copy()
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load the application configuration, optionally from one YAML file."""
    paths = [Path(config_path)] if config_path else []
    return ConfigLoader(config_paths=paths).load_config()
