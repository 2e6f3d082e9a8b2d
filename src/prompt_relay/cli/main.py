import typer

from .commands import generate, provider, serve

app = typer.Typer(help="Prompt Relay CLI", no_args_is_help=True)

app.command(name="serve", help="Start the relay server")(serve.serve)
app.command(name="generate", help="Generate text once")(generate.generate)
app.add_typer(provider.app, name="provider", help="Inspect LLM providers")


def main():
    app()


if __name__ == "__main__":
    main()
