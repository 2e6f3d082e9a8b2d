"""
Response bodies of the generation endpoint.

The envelope mirrors the candidates/content/parts layout that browser clients
already parse, whichever vendor produced the text.
"""

from typing import Any

from prompt_relay.providers.base import GenerationResult

CREDENTIAL_HINT = (
    "Please ensure at least one AI API key is configured in your .env file "
    "(GROQ_API_KEY, OPENAI_API_KEY, GEMINI_API_KEY, or ANTHROPIC_API_KEY)."
)
FALLBACK_ERROR = "AI proxy error"
INVALID_PROVIDER_MESSAGE = "Invalid provider in request body"


def to_envelope(result: GenerationResult) -> dict[str, Any]:
    """Shape a result into the candidates/content/parts body."""
    return {
        "candidates": [{"content": {"parts": [{"text": result.text}]}}],
        "provider": result.provider_used,
        "model": result.model_used,
    }


def error_body(message: str | None) -> dict[str, str]:
    return {"error": message or FALLBACK_ERROR}


def exhausted_message(last_error: str | None) -> str:
    """Message returned when no provider produced text."""
    return (
        f"Failed to generate content. Error: {last_error or 'All providers failed'}. "
        f"{CREDENTIAL_HINT}"
    )
