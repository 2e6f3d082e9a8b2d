"""Configuration management for prompt-relay."""

from .env_manager import EnvManager
from .loader import ConfigLoader, load_config
from .schemas import AppConfig, LLMConfig, ProviderSettings, ServerConfig

__all__ = [
    "AppConfig",
    "ConfigLoader",
    "EnvManager",
    "LLMConfig",
    "ProviderSettings",
    "ServerConfig",
    "load_config",
]
