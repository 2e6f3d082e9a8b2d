"""CLI commands for prompt-relay."""

from . import generate, provider, serve

__all__ = ["generate", "provider", "serve"]
