"""
OpenAI provider implementation
"""

from prompt_relay.providers.base import ProviderName
from prompt_relay.providers.generic_provider import OpenAICompatibleProvider
from prompt_relay.providers.provider_manager import register_provider


@register_provider(ProviderName.OPENAI)
class OpenAIProvider(OpenAICompatibleProvider):
    """Provider for the OpenAI chat.completions API"""

    display_name = "OpenAI"
    default_base_url = "https://api.openai.com/v1"
    # GPT-4 first, then the cheaper and newer fallbacks
    default_models = ("gpt-4", "gpt-3.5-turbo", "gpt-4-turbo-preview")
    credential_envs = ("OPENAI_API_KEY",)
