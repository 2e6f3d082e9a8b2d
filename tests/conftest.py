from __future__ import annotations

import inspect
import os
import sys
from pathlib import Path

# Add project src/ to sys.path for imports like `prompt_relay.*`
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from prompt_relay.config.env_manager import EnvManager

CREDENTIAL_ENVS = (
    "GROQ_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "BARD_API_KEY",
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
)


def pytest_configure(config):
    """Configure pytest for async tests."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


def pytest_collection_modifyitems(config, items):
    """Mark coroutine tests so pytest-asyncio runs them."""
    for item in items:
        if hasattr(item, "function") and inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials and RELAY_ overrides out of every test."""
    for name in CREDENTIAL_ENVS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("RELAY_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_env():
    """Build an EnvManager reading from a plain dict instead of os.environ."""

    def _make(**values: str) -> EnvManager:
        return EnvManager(env_paths=[], environ=dict(values))

    return _make
