"""HTTP surface of the relay."""

from .app import create_app
from .envelope import exhausted_message, to_envelope

__all__ = ["create_app", "exhausted_message", "to_envelope"]
