"""Environment variable management for prompt-relay."""

import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from prompt_relay.core.exceptions import ConfigError
from prompt_relay.utils.logging import get_logger

logger = get_logger("config.env_manager")


class EnvManager:
    """Manages loading and parsing environment variables for configuration."""

    def __init__(
        self,
        env_prefix: str = "RELAY_",
        env_paths: list[Path] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize the environment manager.

        Args:
            env_prefix: Prefix for environment variables to load (default: "RELAY_")
            env_paths: Optional list of .env file paths to load (default: auto-detect)
            environ: Mapping to read variables from (default: ``os.environ``)
        """
        self.env_prefix = env_prefix
        self.env_paths = env_paths or self._get_default_env_paths()
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        # Looked up on every access so that variables set after startup are seen
        return self._environ if self._environ is not None else os.environ

    def _get_default_env_paths(self) -> list[Path]:
        """Get default .env file paths to check."""
        # Try to find project root by looking for pyproject.toml
        current_path = Path(__file__).parent
        for parent in [current_path, *list(current_path.parents)]:
            if (parent / "pyproject.toml").exists():
                return [parent / ".env", parent / ".env.local"]
        # Fallback to current working directory
        return [Path.cwd() / ".env", Path.cwd() / ".env.local"]

    def load_env_files(self) -> None:
        """Load .env files into the process environment.

        Variables already set in the process win; ``.env.local`` wins over
        ``.env``.

        Raises:
            ConfigError: If .env file exists but cannot be loaded
        """
        loaded_any = False
        # Later files take precedence, so they are loaded first without override
        for env_path in reversed(self.env_paths):
            if env_path.exists():
                try:
                    load_dotenv(env_path, override=False)
                    logger.info(f"Loaded environment variables from {env_path}")
                    loaded_any = True
                except Exception as e:
                    raise ConfigError(
                        f"Failed to load .env file {env_path}: {e}"
                    ) from e

        if not loaded_any:
            logger.debug("No .env files found to load")

    def first_set(self, names: Sequence[str]) -> str | None:
        """Return the first non-empty value among the given variable names.

        Used for credentials, which may be configured under an alias name.
        """
        for name in names:
            value = self.environ.get(name)
            if value and value.strip():
                return value.strip()
        return None

    def presence(self, names: Sequence[str]) -> dict[str, bool]:
        """Report which of the given variables are set, without exposing values."""
        return {name: bool(self.environ.get(name)) for name in names}

    def get_config_from_env(self) -> dict[str, Any]:
        """Extract configuration from environment variables.

        Returns:
            Dictionary with configuration parsed from environment variables

        Raises:
            ConfigError: If environment variable parsing fails
        """
        config_data: dict[str, Any] = {}
        env_count = 0

        try:
            for key, value in self.environ.items():
                if key.startswith(self.env_prefix):
                    config_key = key[len(self.env_prefix) :].lower()
                    env_count += 1

                    # Convert double underscores to nested structure
                    # e.g., LLM__REQUEST_TIMEOUT → {"llm": {"request_timeout": value}}
                    key_parts = config_key.split("__")
                    self._set_nested_value(config_data, key_parts, value)

            if env_count > 0:
                logger.debug(
                    f"Loaded {env_count} environment variables with prefix '{self.env_prefix}'"
                )

        except Exception as e:
            raise ConfigError(f"Failed to parse environment variables: {e}") from e

        return config_data

    def _set_nested_value(
        self, data: dict[str, Any], key_parts: list[str], value: str
    ) -> None:
        """Set a nested dictionary value from key parts."""
        current = data

        for part in key_parts[:-1]:
            if part not in current:
                current[part] = {}
            elif not isinstance(current[part], dict):
                logger.warning(
                    f"Cannot set nested value for {'.'.join(key_parts)}: {part} is not a dictionary"
                )
                return
            current = current[part]

        current[key_parts[-1]] = self._convert_env_value(value)

    def _convert_env_value(self, value: str) -> Any:
        """Convert string environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Converted value (bool, int, float, or string)
        """
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        try:
            if "." not in value and "e" not in value.lower():
                return int(value)
            return float(value)
        except ValueError:
            pass

        return value if value != "null" else None
