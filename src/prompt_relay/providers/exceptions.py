"""
Provider-specific exceptions

Every error an adapter raises is a ``ProviderError``. The adapters classify
vendor failures when they parse the vendor's reply: ``ModelUnavailableError``
is the only recoverable kind and moves on to the next model of the same
vendor; everything else aborts that vendor.
"""

from prompt_relay.core.exceptions import LLMError


class ProviderError(LLMError):
    """Base exception for provider-related errors"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        *,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message, subsystem=provider)


class ModelUnavailableError(ProviderError):
    """Raised when the vendor reports that the requested model does not exist"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        *,
        model: str | None = None,
        status_code: int | None = None,
    ):
        self.model = model
        super().__init__(message, provider, status_code=status_code)


class AllModelsFailedError(ProviderError):
    """Raised when every model of a vendor was tried without a usable response"""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        *,
        attempts: list | None = None,
    ):
        # ModelAttempt records, one per model tried
        self.attempts = list(attempts or [])
        super().__init__(message, provider)


class ProviderConnectionError(ProviderError):
    """Raised when connection to provider fails or the vendor returns a 5xx"""


class ProviderAuthError(ProviderError):
    """Raised when authentication with provider fails"""


class ProviderRateLimitError(ProviderError):
    """Raised when rate limit is exceeded"""


class ProviderTimeoutError(ProviderError):
    """Raised when request times out"""


class ProviderResponseError(ProviderError):
    """Raised when the vendor reply cannot be used (bad shape, empty text)"""
