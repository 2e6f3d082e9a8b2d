"""Application bootstrap sequence."""

import logging
from pathlib import Path

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.config.loader import ConfigLoader
from prompt_relay.config.schemas import AppConfig
from prompt_relay.core.app_context import AppContext
from prompt_relay.core.exceptions import ConfigError
from prompt_relay.providers.provider_manager import ProviderManager
from prompt_relay.providers.router import ProviderRouter
from prompt_relay.utils.logging import get_logger, parse_log_level, setup_logging

logger = get_logger("core.bootstrap")


def _setup_environment(env_manager: EnvManager) -> None:
    """Load .env files; a broken file is reported but does not stop startup."""
    try:
        env_manager.load_env_files()
    except ConfigError as e:
        logger.warning(f"Failed to load .env files: {e}")


def bootstrap(
    config_path: str | Path | None = None,
    *,
    log_level: int | str | None = None,
    config: AppConfig | None = None,
    env_manager: EnvManager | None = None,
    load_env: bool = True,
) -> AppContext:
    """Initialize and wire the application.

    Args:
        config_path: Optional YAML configuration file
        log_level: Override for the configured log level
        config: Pre-built configuration, skips loading (for testing)
        env_manager: Environment source (for testing)
        load_env: Whether to read .env files into the process environment

    Returns:
        AppContext with the provider manager and router ready to use

    Raises:
        ConfigError: If the configuration cannot be loaded
    """
    # 1. Basic console logging so that config loading can report problems
    setup_logging(level=parse_log_level(log_level))

    env_manager = env_manager or EnvManager()
    if load_env:
        _setup_environment(env_manager)

    # 2. Configuration
    if config is None:
        paths = [Path(config_path)] if config_path else []
        config = ConfigLoader(config_paths=paths, env_manager=env_manager).load_config()

    # 3. Final logging level: explicit override beats configuration
    if log_level is None:
        setup_logging(level=parse_log_level(config.server.log_level))

    # 4. Providers and routing
    provider_manager = ProviderManager(config)
    router = ProviderRouter(
        provider_manager, env_manager=env_manager, priority=config.llm.priority
    )

    logger.info(
        f"Bootstrap completed, provider priority: {', '.join(router.priority)}"
    )
    logger.debug(
        f"Effective log level: {logging.getLevelName(logging.getLogger().level)}"
    )
    return AppContext(
        config=config,
        env_manager=env_manager,
        provider_manager=provider_manager,
        router=router,
    )
