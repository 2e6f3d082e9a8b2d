"""
Anthropic Claude provider implementation
"""

from typing import Any

from prompt_relay.providers.base import BaseProvider, ProviderName
from prompt_relay.providers.compatible_drivers import RestJSONDriver, raise_for_status
from prompt_relay.providers.exceptions import ProviderResponseError
from prompt_relay.providers.provider_manager import register_provider

ANTHROPIC_VERSION = "2023-06-01"


@register_provider(ProviderName.CLAUDE)
class ClaudeProvider(BaseProvider):
    """Provider for the Anthropic Messages API.

    Claude runs a single fixed model: a non-2xx reply or an empty answer is
    fatal and nothing is retried.
    """

    display_name = "Claude"
    default_base_url = "https://api.anthropic.com/v1"
    default_models = ("claude-3-haiku-20240307",)
    credential_envs = ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY")

    async def _generate_with_model(self, prompt: str, api_key: str, model: str) -> str:
        driver = RestJSONDriver(
            self.base_url,
            provider_name=self.name.value,
            timeout=self.timeout,
            headers={"x-api-key": api_key, "anthropic-version": ANTHROPIC_VERSION},
            transport=self.transport,
        )
        status_code, body = await driver.post(
            "messages",
            {
                "model": model,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

        if not 200 <= status_code < 300:
            error = body.get("error") if isinstance(body, dict) else None
            error = error if isinstance(error, dict) else {}
            raise_for_status(
                status_code,
                error.get("message") or "Claude API error",
                provider=self.name.value,
                model=model,
                error_code=error.get("type"),
                model_fallback=False,
            )

        text = _extract_text(body)
        if not text.strip():
            raise ProviderResponseError("No response from Claude", provider=self.name.value)
        return text


def _extract_text(body: Any) -> str:
    if not isinstance(body, dict):
        return ""
    content = body.get("content") or []
    if not content or not isinstance(content[0], dict):
        return ""
    return content[0].get("text") or ""
