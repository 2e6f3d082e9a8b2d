"""
Provider manager: the fixed registry of vendor adapters
"""

from dataclasses import dataclass

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.config.schemas import AppConfig
from prompt_relay.providers.base import BaseProvider, ProviderName
from prompt_relay.utils.logging import get_logger

logger = get_logger("providers.manager")

# Module-level registry for provider classes (filled by the decorator)
_provider_registry: dict[ProviderName, type[BaseProvider]] = {}


def register_provider(name: ProviderName):
    """Decorator to register a provider class under its vendor name"""

    def decorator(cls: type[BaseProvider]) -> type[BaseProvider]:
        cls.name = name
        _provider_registry[name] = cls
        logger.debug(f"Registered builtin provider: {name}")
        return cls

    return decorator


def list_providers() -> list[ProviderName]:
    """List registered vendors in enum order"""
    return [name for name in ProviderName if name in _provider_registry]


@dataclass(frozen=True)
class ProviderCandidate:
    """A vendor the router may try: its adapter and where its key lives."""

    name: ProviderName
    adapter: BaseProvider

    @property
    def credential_envs(self) -> tuple[str, ...]:
        return self.adapter.env_names

    def resolve_credential(self, env_manager: EnvManager) -> str | None:
        return env_manager.first_set(self.credential_envs)


class ProviderManager:
    """Holds one configured adapter per registered vendor"""

    def __init__(self, config: AppConfig | None = None):
        self.config = config or AppConfig()
        self._candidates: dict[ProviderName, ProviderCandidate] = {}
        self.reload()

    def reload(self, config: AppConfig | None = None) -> None:
        """Rebuild the adapters from configuration"""
        if config is not None:
            self.config = config

        unknown = set(self.config.providers) - {name.value for name in ProviderName}
        for name in sorted(unknown):
            logger.warning(f"Ignoring settings for unknown provider '{name}'")

        self._candidates = {
            name: ProviderCandidate(name=name, adapter=cls.from_config(self.config))
            for name, cls in _provider_registry.items()
        }
        logger.debug(f"Provider registry ready: {[str(n) for n in self._candidates]}")

    def get_candidate(self, name: str) -> ProviderCandidate | None:
        """Look up a candidate by vendor name; unknown names give None"""
        try:
            key = ProviderName(name.lower())
        except ValueError:
            return None
        return self._candidates.get(key)

    def get_provider(self, name: str) -> BaseProvider | None:
        """Get a provider adapter by name"""
        candidate = self.get_candidate(name)
        return candidate.adapter if candidate else None

    def set_provider(self, adapter: BaseProvider) -> None:
        """Replace the adapter used for the adapter's vendor"""
        self._candidates[adapter.name] = ProviderCandidate(
            name=adapter.name, adapter=adapter
        )

    def list_providers(self) -> list[str]:
        """List all configured provider names"""
        return [name.value for name in ProviderName if name in self._candidates]
