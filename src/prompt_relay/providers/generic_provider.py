"""
Generic provider for vendors exposing an OpenAI-compatible chat.completions API.
"""

from prompt_relay.providers.base import BaseProvider
from prompt_relay.providers.compatible_drivers import OpenAIChatCompletionsDriver


class OpenAICompatibleProvider(BaseProvider):
    """Shared adapter body for OpenAI and OpenAI-compatible vendors."""

    def _create_driver(self, api_key: str) -> OpenAIChatCompletionsDriver:
        return OpenAIChatCompletionsDriver(
            api_key=api_key,
            base_url=self.base_url,
            provider_name=self.name.value,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _generate_with_model(self, prompt: str, api_key: str, model: str) -> str:
        driver = self._create_driver(api_key)
        return await driver.generate(
            prompt,
            model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
