"""
Compatible drivers for different LLM APIs

This module provides the transport side of the adapters: a driver for
OpenAI-compatible chat.completions APIs (OpenAI itself, Groq) built on the
openai library, and a plain JSON-over-HTTP driver built on httpx for vendors
with their own REST shape (Gemini, Anthropic).

Both drivers turn vendor failures into typed provider exceptions at the point
where the vendor reply is parsed, so the adapters never inspect free-text
error messages.
"""

from typing import Any, NoReturn

import httpx
from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from prompt_relay.providers.exceptions import (
    ModelUnavailableError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from prompt_relay.utils.logging import get_logger

logger = get_logger("providers.compatible_drivers")

# Vendor error codes meaning "this model name does not exist for you"
MODEL_UNAVAILABLE_CODES = frozenset(
    {"model_not_found", "model_decommissioned", "NOT_FOUND"}
)


def raise_for_status(
    status_code: int,
    message: str,
    *,
    provider: str,
    model: str | None = None,
    error_code: str | None = None,
    model_fallback: bool = True,
) -> NoReturn:
    """Map a non-2xx vendor reply onto the provider exception hierarchy.

    Only an explicit 404 or a known model-missing error code is recoverable,
    and only when the caller walks a model list (``model_fallback``).
    Anything unrecognized is fatal.
    """
    if model_fallback and (status_code == 404 or error_code in MODEL_UNAVAILABLE_CODES):
        raise ModelUnavailableError(
            message, provider=provider, model=model, status_code=status_code
        )
    if status_code in (401, 403):
        raise ProviderAuthError(message, provider=provider, status_code=status_code)
    if status_code == 429:
        raise ProviderRateLimitError(message, provider=provider, status_code=status_code)
    if 500 <= status_code < 600:
        raise ProviderConnectionError(message, provider=provider, status_code=status_code)

    logger.error(f"API error in {provider}: HTTP {status_code} {message}")
    raise ProviderError(message, provider=provider, status_code=status_code)


class OpenAIChatCompletionsDriver:
    """Driver for OpenAI-compatible chat.completions API using the openai library"""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        provider_name: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.provider_name = provider_name
        http_client = (
            httpx.AsyncClient(transport=transport, timeout=timeout)
            if transport is not None
            else None
        )
        # Retries are disabled: falling back is the adapter's job
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def generate(
        self,
        prompt: str,
        model: str,
        *,
        temperature: float,
        max_tokens: int,
        **extra: Any,
    ) -> str:
        """Send one user message and return the text of the first choice."""
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            **extra,
        }

        try:
            response = await self.client.chat.completions.create(**payload)
        except APIError as e:
            self._handle_error(e, model)
        finally:
            await self.client.close()

        logger.debug("Response from %s/%s: %s", self.provider_name, model, response)
        return self._parse_response(response)

    def _parse_response(self, response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or ""

    def _error_message(self, e: APIError) -> str:
        body = getattr(e, "body", None)
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return getattr(e, "message", None) or str(e) or "API error"

    def _handle_error(self, e: APIError, model: str) -> NoReturn:
        """Handle API errors by checking status code and error code attributes"""
        if isinstance(e, APITimeoutError):
            raise ProviderTimeoutError(
                f"Request to {model} timed out", provider=self.provider_name
            ) from e
        if isinstance(e, APIConnectionError):
            raise ProviderConnectionError(
                f"Connection error: {self._error_message(e)}",
                provider=self.provider_name,
            ) from e
        if isinstance(e, APIStatusError):
            try:
                raise_for_status(
                    e.status_code,
                    self._error_message(e),
                    provider=self.provider_name,
                    model=model,
                    error_code=e.code,
                )
            except ProviderError as mapped:
                raise mapped from e

        logger.error(f"API error in {self.provider_name}: {e}", exc_info=True)
        raise ProviderError(
            f"API error: {self._error_message(e)}", provider=self.provider_name
        ) from e


class RestJSONDriver:
    """Driver for vendors that speak their own JSON-over-HTTP dialect"""

    def __init__(
        self,
        base_url: str,
        *,
        provider_name: str,
        timeout: float,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.provider_name = provider_name
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        self.transport = transport

    async def post(self, path: str, payload: dict[str, Any]) -> tuple[int, Any]:
        """POST ``payload`` and return ``(status_code, decoded JSON or None)``.

        Raises:
            ProviderTimeoutError: the vendor did not answer in time
            ProviderConnectionError: the request could not be delivered
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(url, json=payload, headers=self.headers)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"Request to {path} timed out", provider=self.provider_name
            ) from e
        except httpx.HTTPError as e:
            raise ProviderConnectionError(
                f"Connection error: {e}", provider=self.provider_name
            ) from e

        try:
            body = response.json()
        except ValueError:
            logger.debug(f"Non-JSON body from {self.provider_name}: {response.text!r}")
            body = None

        return response.status_code, body
