"""Start the relay server."""

import typer
import uvicorn

from prompt_relay.core.bootstrap import bootstrap
from prompt_relay.core.error_handler import safe_entrypoint
from prompt_relay.server.app import create_app
from prompt_relay.utils.logging import get_logger

log = get_logger("cli.serve")


@safe_entrypoint("cli.serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind to (default: config)"),
    port: int | None = typer.Option(None, help="Port to listen on (default: config)"),
    config_file: str | None = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (e.g., DEBUG, INFO, WARNING)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose error output"),
) -> None:
    """Serve the generation endpoint over HTTP."""
    ctx = bootstrap(config_file, log_level=log_level)
    server_config = ctx.config.server
    bind_host = host or server_config.host
    bind_port = port or server_config.port

    app = create_app(ctx)
    typer.echo(
        f"Starting server at http://{bind_host}:{bind_port}{server_config.path_prefix}"
    )
    log.debug(f"Priority chain: {ctx.router.priority}")
    uvicorn.run(
        app,
        host=bind_host,
        port=bind_port,
        log_level=(log_level or server_config.log_level).lower(),
    )
