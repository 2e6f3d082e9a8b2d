import pytest

from prompt_relay.core.exceptions import (
    AllProvidersFailedError,
    CLIError,
    ClientError,
    ConfigError,
    DispatchError,
    LLMError,
    PromptValidationError,
    RelayError,
    RelayResponseError,
    RequestInFlightError,
    error_message,
)
from prompt_relay.providers.exceptions import (
    AllModelsFailedError,
    ModelUnavailableError,
    ProviderAuthError,
    ProviderError,
)


def test_relay_error_default_subsystem_prefix():
    err = RelayError("something happened")
    assert str(err) == "[core] something happened"
    assert err.message == "something happened"


def test_relay_error_override_subsystem():
    err = RelayError("boom", subsystem="custom")
    assert str(err) == "[custom] boom"


@pytest.mark.parametrize(
    "exc_class,expected",
    [
        (LLMError, "[llm] oops"),
        (DispatchError, "[dispatch] oops"),
        (ConfigError, "[config] oops"),
        (ClientError, "[client] oops"),
        (CLIError, "[cli] oops"),
    ],
)
def test_subsystem_specific_errors(exc_class, expected):
    err = exc_class("oops")
    assert str(err) == expected


def test_prompt_validation_error_default_message():
    err = PromptValidationError()
    assert err.message == "Missing prompt in request body"
    assert isinstance(err, DispatchError)


def test_all_providers_failed_keeps_last_error_and_history():
    err = AllProvidersFailedError(
        "Invalid API key", attempted=["groq"], skipped=["openai"]
    )
    assert err.last_error == "Invalid API key"
    assert err.message == "Invalid API key"
    assert err.attempted == ["groq"]
    assert err.skipped == ["openai"]


def test_all_providers_failed_without_attempts_uses_generic_message():
    err = AllProvidersFailedError()
    assert err.last_error is None
    assert err.message == "All providers failed"


def test_request_in_flight_message():
    err = RequestInFlightError()
    assert err.message == "Please wait for the current AI request to finish."
    assert isinstance(err, ClientError)


def test_relay_response_error_carries_status():
    err = RelayResponseError("nope", status_code=502)
    assert err.status_code == 502
    assert str(err) == "[client] nope"


def test_provider_error_uses_provider_as_prefix():
    err = ProviderAuthError("Invalid API key", provider="groq", status_code=401)
    assert str(err) == "[groq] Invalid API key"
    assert err.status_code == 401
    assert isinstance(err, LLMError)


def test_provider_error_without_provider_falls_back_to_llm_prefix():
    assert str(ProviderError("bad")) == "[llm] bad"


def test_model_unavailable_records_model():
    err = ModelUnavailableError("gone", provider="gemini", model="gemini-pro")
    assert err.model == "gemini-pro"
    assert isinstance(err, ProviderError)


def test_all_models_failed_keeps_attempts():
    err = AllModelsFailedError("All Groq models failed", "groq", attempts=["a", "b"])
    assert err.attempts == ["a", "b"]


def test_error_message_strips_prefix_for_relay_errors():
    assert error_message(ProviderAuthError("denied", provider="openai")) == "denied"
    assert error_message(ValueError("raw text")) == "raw text"
