"""
Groq provider implementation
"""

from prompt_relay.providers.base import ProviderName
from prompt_relay.providers.generic_provider import OpenAICompatibleProvider
from prompt_relay.providers.provider_manager import register_provider


@register_provider(ProviderName.GROQ)
class GroqProvider(OpenAICompatibleProvider):
    """Provider for Groq, through its OpenAI-compatible endpoint"""

    display_name = "Groq"
    default_base_url = "https://api.groq.com/openai/v1"
    default_models = (
        "llama-3.1-8b-instant",
        "llama-3.1-70b-versatile",
        "llama3-8b-8192",
        "mixtral-8x7b-32768",
    )
    credential_envs = ("GROQ_API_KEY",)
