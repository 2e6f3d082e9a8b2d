"""
LLM Provider System

One adapter per vendor plus the router that walks them in priority order.
"""

# Import provider modules to trigger decorator registration
from . import (
    anthropic_provider,  # noqa: F401
    google_provider,  # noqa: F401
    groq_provider,  # noqa: F401
    openai_provider,  # noqa: F401
)
from .anthropic_provider import ClaudeProvider
from .base import (
    AUTO_PREFERENCE,
    BaseProvider,
    GenerationRequest,
    GenerationResult,
    ModelAttempt,
    ProviderName,
)
from .exceptions import (
    AllModelsFailedError,
    ModelUnavailableError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from .google_provider import GoogleGeminiProvider
from .groq_provider import GroqProvider
from .openai_provider import OpenAIProvider
from .provider_manager import (
    ProviderCandidate,
    ProviderManager,
    list_providers,
    register_provider,
)
from .router import DispatchOutcome, ProviderRouter, build_request

__all__ = [
    "AUTO_PREFERENCE",
    "AllModelsFailedError",
    "BaseProvider",
    "ClaudeProvider",
    "DispatchOutcome",
    "GenerationRequest",
    "GenerationResult",
    "GoogleGeminiProvider",
    "GroqProvider",
    "ModelAttempt",
    "ModelUnavailableError",
    "OpenAIProvider",
    "ProviderAuthError",
    "ProviderCandidate",
    "ProviderConnectionError",
    "ProviderError",
    "ProviderManager",
    "ProviderName",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ProviderRouter",
    "ProviderTimeoutError",
    "build_request",
    "list_providers",
    "register_provider",
]
