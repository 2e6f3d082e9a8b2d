"""One-shot generation from the terminal."""

import asyncio

import typer

from prompt_relay.client.client import GenerationClient
from prompt_relay.core.bootstrap import bootstrap
from prompt_relay.core.error_handler import safe_entrypoint
from prompt_relay.providers.base import GenerationResult


async def _generate_in_process(
    prompt: str, provider: str, config_file: str | None, log_level: str | None
) -> GenerationResult:
    ctx = bootstrap(config_file, log_level=log_level or "WARNING")
    return await ctx.router.generate(prompt, provider)


@safe_entrypoint("cli.generate")
def generate(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    provider: str = typer.Option(
        "auto", "--provider", "-p", help="'auto' or groq, openai, gemini, claude"
    ),
    url: str | None = typer.Option(
        None, "--url", help="Base URL of a running relay; dispatch in-process if omitted"
    ),
    show_meta: bool = typer.Option(
        False, "--show-meta", help="Also print which provider and model answered"
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (e.g., DEBUG, INFO, WARNING)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose error output"),
) -> None:
    """Generate text for PROMPT through the provider chain."""
    if url:
        client = GenerationClient(url, provider=provider)
        typer.echo(asyncio.run(client.generate(prompt)))
        return

    result = asyncio.run(
        _generate_in_process(prompt, provider, config_file, log_level)
    )
    typer.echo(result.text)
    if show_meta:
        typer.echo(f"provider: {result.provider_used}  model: {result.model_used}")
