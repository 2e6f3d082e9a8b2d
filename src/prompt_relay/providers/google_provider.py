"""
Google Gemini provider implementation
"""

from typing import Any

from prompt_relay.providers.base import BaseProvider, ProviderName
from prompt_relay.providers.compatible_drivers import RestJSONDriver, raise_for_status
from prompt_relay.providers.provider_manager import register_provider


@register_provider(ProviderName.GEMINI)
class GoogleGeminiProvider(BaseProvider):
    """Provider for the Gemini ``generateContent`` REST API"""

    display_name = "Gemini"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"
    default_models = (
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash-latest",
        "gemini-1.5-pro-latest",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-pro",
    )
    credential_envs = ("GEMINI_API_KEY", "BARD_API_KEY")

    # Fixed nucleus/top-k sampling, same as Google's reference client defaults
    top_k = 40
    top_p = 0.95

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": self.top_k,
                "topP": self.top_p,
                "maxOutputTokens": self.max_tokens,
            },
        }

    async def _generate_with_model(self, prompt: str, api_key: str, model: str) -> str:
        driver = RestJSONDriver(
            self.base_url,
            provider_name=self.name.value,
            timeout=self.timeout,
            headers={"x-goog-api-key": api_key},
            transport=self.transport,
        )
        status_code, body = await driver.post(
            f"models/{model}:generateContent", self._build_payload(prompt)
        )

        if not 200 <= status_code < 300:
            error = body.get("error") if isinstance(body, dict) else None
            error = error if isinstance(error, dict) else {}
            raise_for_status(
                status_code,
                error.get("message") or f"Gemini API error (HTTP {status_code})",
                provider=self.name.value,
                model=model,
                error_code=error.get("status"),
            )

        return _extract_text(body)


def _extract_text(body: Any) -> str:
    """Join the text parts of the first candidate; blocked or empty replies give ''."""
    if not isinstance(body, dict):
        return ""
    candidates = body.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(
        part.get("text", "") for part in parts if isinstance(part, dict)
    )
