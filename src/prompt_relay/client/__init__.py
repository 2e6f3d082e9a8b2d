"""Client side of the relay."""

from .client import GenerationClient
from .single_flight import SingleFlightGuard

__all__ = ["GenerationClient", "SingleFlightGuard"]
