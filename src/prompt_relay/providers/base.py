"""
Base classes for LLM providers
"""

import abc
import asyncio
from enum import Enum
from typing import Any, ClassVar, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from prompt_relay.config.schemas import AppConfig
from prompt_relay.providers.exceptions import (
    AllModelsFailedError,
    ModelUnavailableError,
    ProviderError,
    ProviderTimeoutError,
)
from prompt_relay.utils.logging import get_logger

logger = get_logger("providers.base")

AUTO_PREFERENCE = "auto"


class ProviderName(str, Enum):
    """The closed set of vendors the relay can talk to."""

    GROQ = "groq"
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"

    def __str__(self) -> str:
        return self.value


class GenerationRequest(BaseModel):
    """One inbound generation call."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(description="Free-text prompt to send to the model")
    provider_preference: str = Field(
        default=AUTO_PREFERENCE,
        description="'auto' for the priority chain, or a single provider name",
    )

    @field_validator("provider_preference", mode="before")
    @classmethod
    def normalize_preference(cls, v: Any) -> str:
        """Lower-case the preference; absent or blank means 'auto'."""
        if v is None:
            return AUTO_PREFERENCE
        v = str(v).strip().lower()
        return v or AUTO_PREFERENCE

    @property
    def is_auto(self) -> bool:
        return self.provider_preference == AUTO_PREFERENCE


class GenerationResult(BaseModel):
    """Normalized answer, whichever vendor produced it."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Generated text, trimmed", min_length=1)
    model_used: str = Field(description="Model that generated the text", min_length=1)
    provider_used: str = Field(description="Provider that answered", min_length=1)


class ModelAttempt(BaseModel):
    """Outcome of trying one model of one vendor."""

    provider: str
    model: str
    outcome: Literal["model_unavailable", "empty"]
    error: str | None = None


class BaseProvider(abc.ABC):
    """Base class for LLM providers

    A provider walks its ordered model list and returns the first non-empty
    answer. Subclasses implement ``_generate_with_model`` and are expected to
    raise ``ModelUnavailableError`` only when the vendor clearly says the model
    does not exist; any other ``ProviderError`` stops the walk.
    """

    name: ClassVar[ProviderName]
    display_name: ClassVar[str]
    default_models: ClassVar[tuple[str, ...]]
    default_base_url: ClassVar[str]
    credential_envs: ClassVar[tuple[str, ...]]

    def __init__(
        self,
        models: list[str] | None = None,
        base_url: str | None = None,
        credential_envs: list[str] | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.models: list[str] = list(models or self.default_models)
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.env_names: tuple[str, ...] = tuple(
            credential_envs or self.credential_envs
        )
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        # Custom transport for the vendor HTTP calls (tests, proxies)
        self.transport = transport

    @classmethod
    def from_config(cls, config: AppConfig) -> "BaseProvider":
        """Build a provider from the application configuration."""
        settings = config.provider_settings(cls.name.value)
        return cls(
            models=settings.models,
            base_url=settings.base_url,
            credential_envs=settings.credential_envs,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
            timeout=config.llm.request_timeout,
        )

    @abc.abstractmethod
    async def _generate_with_model(self, prompt: str, api_key: str, model: str) -> str:
        """Run one request against one model and return the raw text."""

    async def _attempt(self, prompt: str, api_key: str, model: str) -> str:
        try:
            return await asyncio.wait_for(
                self._generate_with_model(prompt, api_key, model), timeout=self.timeout
            )
        except TimeoutError as e:
            raise ProviderTimeoutError(
                f"Request to {model} timed out after {self.timeout:g}s",
                provider=self.name.value,
            ) from e

    async def generate(self, prompt: str, api_key: str) -> GenerationResult:
        """Generate text for ``prompt``, falling back across this vendor's models.

        Raises:
            ProviderError: the first fatal vendor error, or
                ``AllModelsFailedError`` when no model produced text
        """
        attempts: list[ModelAttempt] = []

        for model in self.models:
            try:
                text = await self._attempt(prompt, api_key, model)
            except ModelUnavailableError as e:
                logger.info(f"{self.name} model {model} unavailable, trying next model")
                attempts.append(
                    ModelAttempt(
                        provider=self.name.value,
                        model=model,
                        outcome="model_unavailable",
                        error=e.message,
                    )
                )
                continue
            except ProviderError as e:
                logger.warning(f"{self.name} model {model} failed: {e.message}")
                raise

            if text and text.strip():
                logger.debug(f"{self.name} model {model} answered")
                return GenerationResult(
                    text=text.strip(), model_used=model, provider_used=self.name.value
                )

            logger.info(f"{self.name} model {model} returned empty text, trying next model")
            attempts.append(
                ModelAttempt(provider=self.name.value, model=model, outcome="empty")
            )

        raise AllModelsFailedError(
            f"All {self.display_name} models failed",
            provider=self.name.value,
            attempts=attempts,
        )

    def get_available_models(self) -> list[str]:
        """Get list of model names for this provider, in the order they are tried."""
        return list(self.models)
