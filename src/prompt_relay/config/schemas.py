"""Configuration schemas for prompt-relay."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _split_csv(value: Any) -> Any:
    """Accept ``"a,b,c"`` from environment variables where a list is expected."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class ServerConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=5000, gt=0, lt=65536, description="Port to listen on")
    path_prefix: str = Field(
        default="/api/ai", description="Prefix the generation routes are mounted under"
    )
    cors_origin_regex: str | None = Field(
        default=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
        description="Origins allowed to call the API with credentials",
    )
    cors_fallback_origin: str = Field(
        default="http://localhost:3000",
        description="Origin allowed when the request origin does not match",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("path_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and does not end with one."""
        v = v.strip()
        if not v or v == "/":
            return ""
        return "/" + v.strip("/")


class LLMConfig(BaseModel):
    """Sampling and transport settings shared by every provider."""

    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=1024, gt=0, description="Maximum tokens to generate"
    )
    request_timeout: float = Field(
        default=30.0, gt=0.0, description="Timeout in seconds for one model attempt"
    )
    priority: list[str] = Field(
        default_factory=lambda: ["groq", "openai", "gemini", "claude"],
        description="Provider order used when no provider is requested",
    )

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: list[str]) -> list[str]:
        # Lazy import: providers.base depends on this module
        from prompt_relay.providers.base import ProviderName

        if not v:
            raise ValueError("priority cannot be empty")
        names = [name.strip().lower() for name in v]
        known = {member.value for member in ProviderName}
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ValueError(f"unknown providers in priority: {', '.join(unknown)}")
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"providers listed more than once: {', '.join(duplicates)}")
        return names


class ProviderSettings(BaseModel):
    """Per-provider overrides; unset fields fall back to the provider defaults."""

    models: list[str] | None = Field(
        default=None, description="Ordered model names to try"
    )
    base_url: str | None = Field(default=None, description="API base URL")
    credential_envs: list[str] | None = Field(
        default=None,
        description="Environment variable names holding the API key, first non-empty wins",
    )

    @field_validator("models", "credential_envs", mode="before")
    @classmethod
    def parse_lists(cls, v: Any) -> Any:
        return _split_csv(v)

    @field_validator("models")
    @classmethod
    def validate_models(cls, v: list[str] | None) -> list[str] | None:
        if v is not None and not v:
            raise ValueError("models cannot be empty")
        return v


class AppConfig(BaseModel):
    """Top-level application configuration."""

    server: ServerConfig = Field(
        default_factory=ServerConfig, description="Server configuration"
    )
    llm: LLMConfig = Field(default_factory=LLMConfig, description="LLM configuration")
    providers: dict[str, ProviderSettings] = Field(
        default_factory=dict, description="Per-provider overrides"
    )

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> AppConfig:
        """Create AppConfig from a dictionary, handling nested models."""
        providers = {
            name.lower(): ProviderSettings(**(data or {}))
            for name, data in (config_dict.get("providers") or {}).items()
        }
        return cls(
            server=ServerConfig(**(config_dict.get("server") or {})),
            llm=LLMConfig(**(config_dict.get("llm") or {})),
            providers=providers,
        )

    def provider_settings(self, name: str) -> ProviderSettings:
        """Get overrides for a provider, empty settings when none are configured."""
        return self.providers.get(name, ProviderSettings())
