"""HTTP-level tests for the vendor adapters."""

import json

import httpx
import pytest

from prompt_relay.providers.anthropic_provider import ANTHROPIC_VERSION, ClaudeProvider
from prompt_relay.providers.exceptions import (
    AllModelsFailedError,
    ModelUnavailableError,
    ProviderAuthError,
    ProviderError,
    ProviderResponseError,
)
from prompt_relay.providers.google_provider import GoogleGeminiProvider
from prompt_relay.providers.groq_provider import GroqProvider
from prompt_relay.providers.openai_provider import OpenAIProvider


def chat_completion(content):
    return httpx.Response(
        200,
        json={
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 0,
            "model": "m",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        },
    )


def gemini_text(text):
    return httpx.Response(
        200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]}
    )


def gemini_error(status, message, code):
    return httpx.Response(
        status, json={"error": {"code": status, "message": message, "status": code}}
    )


class Recorder:
    """MockTransport handler answering per model from a table."""

    def __init__(self, answers, model_of):
        self.answers = answers
        self.model_of = model_of
        self.requests: list[httpx.Request] = []

    def __call__(self, request):
        self.requests.append(request)
        return self.answers[self.model_of(request)]

    @property
    def models(self):
        return [self.model_of(r) for r in self.requests]


def chat_model(request):
    return json.loads(request.content)["model"]


def gemini_model(request):
    return request.url.path.rsplit("/", 1)[-1].split(":")[0]


class TestGroqProvider:
    def test_defaults(self):
        provider = GroqProvider()
        assert provider.models == [
            "llama-3.1-8b-instant",
            "llama-3.1-70b-versatile",
            "llama3-8b-8192",
            "mixtral-8x7b-32768",
        ]
        assert provider.base_url == "https://api.groq.com/openai/v1"
        assert provider.env_names == ("GROQ_API_KEY",)

    async def test_decommissioned_model_falls_through(self):
        recorder = Recorder(
            {
                "llama-3.1-8b-instant": httpx.Response(
                    400,
                    json={
                        "error": {
                            "message": "The model has been decommissioned",
                            "code": "model_decommissioned",
                        }
                    },
                ),
                "llama-3.1-70b-versatile": chat_completion("  groq says hi "),
            },
            chat_model,
        )
        provider = GroqProvider(transport=httpx.MockTransport(recorder))

        result = await provider.generate("hello", "gsk-test")

        assert result.text == "groq says hi"
        assert result.model_used == "llama-3.1-70b-versatile"
        assert result.provider_used == "groq"
        assert recorder.models == ["llama-3.1-8b-instant", "llama-3.1-70b-versatile"]
        assert recorder.requests[0].url.host == "api.groq.com"

    async def test_invalid_key_stops_the_model_walk(self):
        recorder = Recorder(
            {
                "llama-3.1-8b-instant": httpx.Response(
                    401, json={"error": {"message": "Invalid API Key"}}
                )
            },
            chat_model,
        )
        provider = GroqProvider(transport=httpx.MockTransport(recorder))

        with pytest.raises(ProviderAuthError, match="Invalid API Key"):
            await provider.generate("hello", "bad")

        assert recorder.models == ["llama-3.1-8b-instant"]


class TestOpenAIProvider:
    def test_defaults(self):
        provider = OpenAIProvider()
        assert provider.models == ["gpt-4", "gpt-3.5-turbo", "gpt-4-turbo-preview"]
        assert provider.env_names == ("OPENAI_API_KEY",)

    async def test_all_models_missing(self):
        missing = httpx.Response(
            404, json={"error": {"message": "does not exist", "code": "model_not_found"}}
        )
        recorder = Recorder(
            {model: missing for model in OpenAIProvider.default_models}, chat_model
        )
        provider = OpenAIProvider(transport=httpx.MockTransport(recorder))

        with pytest.raises(AllModelsFailedError, match="All OpenAI models failed"):
            await provider.generate("hello", "sk-test")

        assert recorder.models == list(OpenAIProvider.default_models)


class TestGoogleGeminiProvider:
    def test_defaults(self):
        provider = GoogleGeminiProvider()
        assert len(provider.models) == 6
        assert provider.models[0] == "gemini-2.0-flash-exp"
        assert provider.models[-1] == "gemini-pro"
        assert provider.env_names == ("GEMINI_API_KEY", "BARD_API_KEY")

    async def test_request_shape(self):
        recorder = Recorder({"gemini-2.0-flash-exp": gemini_text("hi")}, gemini_model)
        provider = GoogleGeminiProvider(transport=httpx.MockTransport(recorder))

        await provider.generate("Write a poem", "g-key")

        request = recorder.requests[0]
        assert request.url.path == "/v1beta/models/gemini-2.0-flash-exp:generateContent"
        assert request.headers["x-goog-api-key"] == "g-key"
        assert json.loads(request.content) == {
            "contents": [{"role": "user", "parts": [{"text": "Write a poem"}]}],
            "generationConfig": {
                "temperature": 0.7,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 1024,
            },
        }

    async def test_not_found_and_empty_advance(self):
        recorder = Recorder(
            {
                "gemini-2.0-flash-exp": gemini_error(404, "not found", "NOT_FOUND"),
                "gemini-1.5-flash-latest": httpx.Response(200, json={"candidates": []}),
                "gemini-1.5-pro-latest": gemini_text("third time lucky"),
            },
            gemini_model,
        )
        provider = GoogleGeminiProvider(transport=httpx.MockTransport(recorder))

        result = await provider.generate("hello", "g-key")

        assert result.text == "third time lucky"
        assert result.model_used == "gemini-1.5-pro-latest"
        assert len(recorder.requests) == 3

    async def test_joins_text_parts(self):
        recorder = Recorder(
            {
                "gemini-2.0-flash-exp": httpx.Response(
                    200,
                    json={
                        "candidates": [
                            {"content": {"parts": [{"text": "Hello, "}, {"text": "world"}]}}
                        ]
                    },
                )
            },
            gemini_model,
        )
        provider = GoogleGeminiProvider(transport=httpx.MockTransport(recorder))

        assert (await provider.generate("x", "k")).text == "Hello, world"

    async def test_invalid_argument_is_fatal(self):
        recorder = Recorder(
            {
                "gemini-2.0-flash-exp": gemini_error(
                    400, "API key not valid", "INVALID_ARGUMENT"
                )
            },
            gemini_model,
        )
        provider = GoogleGeminiProvider(transport=httpx.MockTransport(recorder))

        with pytest.raises(ProviderError, match="API key not valid") as exc_info:
            await provider.generate("x", "bad")

        assert not isinstance(exc_info.value, ModelUnavailableError)
        assert len(recorder.requests) == 1


class TestClaudeProvider:
    def make(self, response):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            return response

        return ClaudeProvider(transport=httpx.MockTransport(handler))

    async def test_success(self):
        provider = self.make(
            httpx.Response(200, json={"content": [{"type": "text", "text": " Claude here "}]})
        )

        result = await provider.generate("hello", "sk-ant")

        assert result.text == "Claude here"
        assert result.model_used == "claude-3-haiku-20240307"
        request = self.requests[0]
        assert request.url.path == "/v1/messages"
        assert request.headers["x-api-key"] == "sk-ant"
        assert request.headers["anthropic-version"] == ANTHROPIC_VERSION
        assert json.loads(request.content) == {
            "model": "claude-3-haiku-20240307",
            "max_tokens": 1024,
            "temperature": 0.7,
            "messages": [{"role": "user", "content": "hello"}],
        }

    async def test_non_2xx_is_fatal_with_vendor_message(self):
        provider = self.make(
            httpx.Response(
                404,
                json={"type": "error", "error": {"type": "not_found_error", "message": "model: nope"}},
            )
        )

        with pytest.raises(ProviderError, match="model: nope") as exc_info:
            await provider.generate("hello", "sk-ant")

        assert not isinstance(exc_info.value, ModelUnavailableError)
        assert len(self.requests) == 1

    async def test_error_without_message(self):
        provider = self.make(httpx.Response(500, text="oops"))

        with pytest.raises(ProviderError, match="Claude API error"):
            await provider.generate("hello", "sk-ant")

    async def test_empty_answer_is_fatal(self):
        provider = self.make(httpx.Response(200, json={"content": []}))

        with pytest.raises(ProviderResponseError, match="No response from Claude"):
            await provider.generate("hello", "sk-ant")

        assert len(self.requests) == 1
