"""
Provider routing: try vendors in order until one produces text.
"""

from dataclasses import dataclass, field
from typing import Any

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.core.exceptions import (
    AllProvidersFailedError,
    PromptValidationError,
    error_message,
)
from prompt_relay.providers.base import GenerationRequest, GenerationResult
from prompt_relay.providers.provider_manager import ProviderManager
from prompt_relay.utils.logging import get_logger, preview

logger = get_logger("providers.router")


@dataclass
class DispatchOutcome:
    """Everything that happened while routing one request."""

    request: GenerationRequest
    candidates: list[str]
    tried: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    last_error: str | None = None
    result: GenerationResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None

    def raise_for_failure(self) -> GenerationResult:
        """Return the result, or raise the terminal failure of this dispatch."""
        if self.result is None:
            raise AllProvidersFailedError(
                self.last_error, attempted=self.tried, skipped=self.skipped
            )
        return self.result


def build_request(prompt: Any, provider: Any = None) -> GenerationRequest:
    """Validate raw inbound values into a GenerationRequest.

    Raises:
        PromptValidationError: prompt is missing, not text, or blank
    """
    if not isinstance(prompt, str) or not prompt.strip():
        raise PromptValidationError()
    return GenerationRequest(prompt=prompt, provider_preference=provider)


class ProviderRouter:
    """Routes a prompt through the provider chain, first success wins.

    Vendors are tried one after another, each at most once. A vendor without
    a credential is skipped; a vendor that raises is recorded as the last error
    and the next one is tried.
    """

    def __init__(
        self,
        provider_manager: ProviderManager,
        env_manager: EnvManager | None = None,
        priority: list[str] | None = None,
    ):
        self.provider_manager = provider_manager
        self.env_manager = env_manager or EnvManager()
        if priority is None:
            priority = provider_manager.config.llm.priority
        # Each vendor is tried at most once per dispatch
        self.priority = list(dict.fromkeys(str(name).lower() for name in priority))

    def candidate_names(self, request: GenerationRequest) -> list[str]:
        """Ordered vendor names to try for ``request``."""
        if request.is_auto:
            return list(self.priority)
        return [request.provider_preference]

    async def route(self, request: GenerationRequest) -> DispatchOutcome:
        """Try candidates in order and record what happened."""
        outcome = DispatchOutcome(
            request=request, candidates=self.candidate_names(request)
        )
        logger.info(
            f"Dispatching prompt '{preview(request.prompt)}' "
            f"with preference '{request.provider_preference}'"
        )

        for name in outcome.candidates:
            candidate = self.provider_manager.get_candidate(name)
            if candidate is None:
                logger.warning(f"Unknown provider '{name}', skipping")
                outcome.skipped.append(name)
                continue

            api_key = candidate.resolve_credential(self.env_manager)
            if not api_key:
                logger.info(f"No API key found for {name}, skipping")
                outcome.skipped.append(name)
                continue

            logger.info(f"Trying provider: {name}")
            outcome.tried.append(name)
            try:
                result = await candidate.adapter.generate(request.prompt, api_key)
            except Exception as e:
                outcome.last_error = error_message(e) or type(e).__name__
                logger.error(f"Provider {name} failed: {outcome.last_error}")
                continue

            logger.info(
                f"Success with {name} ({result.model_used}), "
                f"{len(result.text)} characters generated"
            )
            outcome.result = result
            break

        if not outcome.succeeded:
            logger.error(
                f"All providers failed: {outcome.last_error or 'nothing attempted'}"
            )
        return outcome

    async def generate(
        self, prompt: Any, provider: Any = None
    ) -> GenerationResult:
        """Validate, route, and return the result or raise the failure.

        Raises:
            PromptValidationError: prompt missing or blank, nothing was attempted
            AllProvidersFailedError: every candidate was skipped or failed
        """
        request = build_request(prompt, provider)
        outcome = await self.route(request)
        return outcome.raise_for_failure()
