class RelayError(Exception):
    """Base exception for all prompt-relay errors.

    The message is automatically prefixed with the subsystem name in square brackets.
    The unprefixed text stays available as ``message``.
    """

    subsystem = "core"

    def __init__(self, message: str, *, subsystem: str | None = None) -> None:
        self.subsystem = subsystem or self.subsystem
        self.message = message
        super().__init__(f"[{self.subsystem}] {message}")


# ─── Subsystem-level exceptions ───────────────────────────────────────────────


class LLMError(RelayError):
    """Raised for issues specific to LLM communication or generation."""

    subsystem = "llm"


class DispatchError(RelayError):
    """Raised when a generation request cannot be routed to a result."""

    subsystem = "dispatch"


class PromptValidationError(DispatchError):
    """Raised when the inbound prompt is missing or empty."""

    def __init__(self, message: str = "Missing prompt in request body") -> None:
        super().__init__(message)


class AllProvidersFailedError(DispatchError):
    """Raised when every candidate provider was skipped or failed."""

    def __init__(
        self,
        last_error: str | None = None,
        *,
        attempted: list[str] | None = None,
        skipped: list[str] | None = None,
    ) -> None:
        self.last_error = last_error
        self.attempted = list(attempted or [])
        self.skipped = list(skipped or [])
        super().__init__(last_error or "All providers failed")


class ConfigError(RelayError):
    """Raised for configuration loading or parsing errors."""

    subsystem = "config"


class ClientError(RelayError):
    """Raised by the HTTP client talking to a relay server."""

    subsystem = "client"


class RequestInFlightError(ClientError):
    """Raised when a client already has a generation call outstanding."""

    def __init__(
        self, message: str = "Please wait for the current AI request to finish."
    ) -> None:
        super().__init__(message)


class RelayResponseError(ClientError):
    """Raised when the relay answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class CLIError(RelayError):
    """Raised for CLI-specific logic or user input issues."""

    subsystem = "cli"


def error_message(error: BaseException) -> str:
    """The bare text of ``error``, without the subsystem prefix."""
    if isinstance(error, RelayError):
        return error.message
    return str(error)
