"""
Async client for a running relay server.
"""

from typing import Any

import httpx

from prompt_relay.client.single_flight import SingleFlightGuard
from prompt_relay.core.exceptions import ClientError, RelayResponseError
from prompt_relay.utils.logging import get_logger, preview

logger = get_logger("client")

DEFAULT_BASE_URL = "http://localhost:5000"
NOT_FOUND_MESSAGE = (
    "AI endpoint not found. Please check if the server is running "
    "and the route is correct."
)


class GenerationClient:
    """Calls ``POST {prefix}/generate`` with at most one call in flight.

    A second ``generate`` while the first is pending fails immediately with
    ``RequestInFlightError`` and sends nothing.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        path_prefix: str = "/api/ai",
        provider: str = "groq",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        guard: SingleFlightGuard | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.path_prefix = "/" + path_prefix.strip("/") if path_prefix.strip("/") else ""
        self.provider = provider
        self.timeout = timeout
        self.transport = transport
        self.guard = guard or SingleFlightGuard()

    @property
    def generate_url(self) -> str:
        return f"{self.base_url}{self.path_prefix}/generate"

    async def generate(self, prompt: str, provider: str | None = None) -> str:
        """Generate text for ``prompt`` and return it trimmed.

        Raises:
            RequestInFlightError: Another call from this client is pending
            RelayResponseError: The relay answered with an error status
            ClientError: Network failure or an unusable response body
        """
        with self.guard.hold():
            return await self._generate(prompt, provider or self.provider)

    async def _generate(self, prompt: str, provider: str) -> str:
        logger.info(f"Sending request with prompt: {preview(prompt, 50)}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.generate_url, json={"prompt": prompt, "provider": provider}
                )
        except httpx.HTTPError as e:
            raise ClientError(
                f"Network error: {e}. Please check if the server is running "
                f"on {self.base_url}"
            ) from e

        logger.debug(f"Response status: {response.status_code}")
        if not response.is_success:
            raise RelayResponseError(
                self._error_message(response), status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ClientError("Invalid response from server") from e

        text = _extract_text(body)
        if not text:
            logger.error(f"No text in response: {preview(response.text, 200)}")
            raise ClientError("No text generated. Please try again.")
        return text.strip()

    def _error_message(self, response: httpx.Response) -> str:
        if response.status_code == 404:
            return NOT_FOUND_MESSAGE
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.text or f"HTTP {response.status_code}: {response.reason_phrase}"


def _extract_text(body: Any) -> str | None:
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
