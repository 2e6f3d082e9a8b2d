"""Prompt Relay: one generation endpoint in front of several LLM vendors."""

__version__ = "0.1.0"
