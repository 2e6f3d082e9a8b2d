"""Application context holding the wired-up relay components."""

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.config.schemas import AppConfig
from prompt_relay.providers.provider_manager import ProviderManager
from prompt_relay.providers.router import ProviderRouter


class AppContext:
    """Central context object that holds application-wide resources."""

    def __init__(
        self,
        config: AppConfig,
        env_manager: EnvManager,
        provider_manager: ProviderManager,
        router: ProviderRouter,
    ) -> None:
        self.config = config
        self.env_manager = env_manager
        self.provider_manager = provider_manager
        self.router = router
