"""Generation routes."""

import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from prompt_relay.core.app_context import AppContext
from prompt_relay.core.exceptions import (
    AllProvidersFailedError,
    PromptValidationError,
    error_message,
)
from prompt_relay.providers.base import ProviderName
from prompt_relay.server.envelope import error_body, exhausted_message, to_envelope
from prompt_relay.server.schemas import GenerateBody, GenerateResponse, PingResponse
from prompt_relay.utils.logging import get_logger

logger = get_logger("server.routes")

router = APIRouter()

SMOKE_TEST_PROMPT = 'Say "Hello, Gemini is working!"'


def get_context(request: Request) -> AppContext:
    return request.app.state.context


@router.post("/generate", response_model=GenerateResponse)
async def generate(body: GenerateBody, context: AppContext = Depends(get_context)):
    try:
        result = await context.router.generate(body.prompt, body.provider)
    except PromptValidationError as e:
        return JSONResponse(status_code=400, content=error_body(e.message))
    except AllProvidersFailedError as e:
        return JSONResponse(
            status_code=500, content=error_body(exhausted_message(e.last_error))
        )
    except Exception as e:
        logger.error(f"AI proxy error: {e!r}", exc_info=True)
        return JSONResponse(status_code=500, content=error_body(error_message(e)))

    return to_envelope(result)


@router.get("/ping", response_model=PingResponse)
async def ping():
    return PingResponse(ts=int(time.time() * 1000))


@router.post("/test")
async def smoke_test(context: AppContext = Depends(get_context)):
    """Check that the Gemini credential works with one fixed prompt."""
    candidate = context.provider_manager.get_candidate(ProviderName.GEMINI)
    if candidate is None:
        return JSONResponse(
            status_code=500, content=error_body("Gemini provider is not registered")
        )

    api_key = candidate.resolve_credential(context.env_manager)
    if not api_key:
        return JSONResponse(
            status_code=500,
            content={
                "error": "GEMINI_API_KEY not found in environment variables",
                "envCheck": context.env_manager.presence(candidate.credential_envs),
            },
        )

    try:
        result = await candidate.adapter.generate(SMOKE_TEST_PROMPT, api_key)
    except Exception as e:
        logger.error(f"Gemini smoke test failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Gemini API test failed",
                "message": error_message(e),
                "details": f"{type(e).__name__}: {e}",
            },
        )

    return {
        "success": True,
        "message": "Gemini API is working!",
        "response": result.text,
        "model": result.model_used,
        "apiKeyLength": len(api_key),
    }
