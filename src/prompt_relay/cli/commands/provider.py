"""
Provider commands for the CLI.

Shows the built-in vendors, their model order and whether a credential is
present. Credential values are never printed.
"""

import typer

from prompt_relay.core.bootstrap import bootstrap
from prompt_relay.core.error_handler import safe_entrypoint
from prompt_relay.core.exceptions import CLIError

app = typer.Typer(name="provider", help="Inspect LLM providers")


@app.command(name="list")
@safe_entrypoint("cli.provider.list")
def list_providers(
    provider: str | None = typer.Option(
        None, "--provider", help="Specific provider to list models for"
    ),
    config_file: str | None = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (e.g., DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """List providers in priority order, or the models of one provider."""
    ctx = bootstrap(config_file, log_level=log_level)
    manager = ctx.provider_manager

    if provider:
        candidate = manager.get_candidate(provider)
        if candidate is None:
            raise CLIError(f"Provider '{provider}' not found")
        typer.echo(f"Provider: {candidate.name} ({candidate.adapter.display_name})")
        typer.echo(f"Base URL: {candidate.adapter.base_url}")
        typer.echo("Models:")
        for model_name in candidate.adapter.get_available_models():
            typer.echo(f"  - {model_name}")
        return

    typer.echo(f"Priority: {' -> '.join(ctx.router.priority)}")
    typer.echo(f"{'Name':<10} {'Credential':<12} {'Models':<7} {'Env'}")
    typer.echo("-" * 60)
    for name in manager.list_providers():
        candidate = manager.get_candidate(name)
        presence = ctx.env_manager.presence(candidate.credential_envs)
        status = "set" if any(presence.values()) else "missing"
        typer.echo(
            f"{name:<10} {status:<12} {len(candidate.adapter.models):<7} "
            f"{', '.join(candidate.credential_envs)}"
        )
