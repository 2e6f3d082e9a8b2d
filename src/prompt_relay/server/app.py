"""
FastAPI application factory.
"""

import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_relay import __version__
from prompt_relay.core.app_context import AppContext
from prompt_relay.core.bootstrap import bootstrap
from prompt_relay.core.exceptions import PromptValidationError
from prompt_relay.providers.base import ProviderName
from prompt_relay.server.envelope import INVALID_PROVIDER_MESSAGE, error_body
from prompt_relay.server.routes import router
from prompt_relay.utils.logging import get_logger

logger = get_logger("server.app")


def log_credential_status(context: AppContext) -> None:
    """Log which provider credentials are present, never their values."""
    for name in ProviderName:
        candidate = context.provider_manager.get_candidate(name)
        if candidate is None:
            continue
        presence = context.env_manager.presence(candidate.credential_envs)
        status = ", ".join(
            f"{env}: {'set' if present else 'missing'}"
            for env, present in presence.items()
        )
        logger.info(f"{name} credentials -> {status}")


def create_app(
    context: AppContext | None = None, *, config_path: str | Path | None = None
) -> FastAPI:
    """Build the relay application.

    Args:
        context: Already bootstrapped context; bootstrapped from ``config_path``
            when omitted.
        config_path: Optional YAML configuration file
    """
    if context is None:
        context = bootstrap(config_path)

    server_config = context.config.server
    app = FastAPI(title="Prompt Relay", version=__version__)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[server_config.cors_fallback_origin],
        allow_origin_regex=server_config.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        logger.info(f"{request.method} {request.url.path}")
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed_ms:.1f}ms"
        )
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        # Malformed JSON, non-object bodies and non-string prompts or providers
        errors = exc.errors()
        logger.info(
            f"Rejected body for {request.url.path}: {len(errors)} validation error(s)"
        )
        if errors and all(
            tuple(error.get("loc", ()))[:2] == ("body", "provider") for error in errors
        ):
            message = INVALID_PROVIDER_MESSAGE
        else:
            message = PromptValidationError().message
        return JSONResponse(status_code=400, content=error_body(message))

    app.include_router(router, prefix=server_config.path_prefix)
    log_credential_status(context)
    return app
