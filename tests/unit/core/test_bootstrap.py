"""Tests for the bootstrap sequence and AppContext."""

import os
from unittest.mock import patch

import pytest
import yaml

from prompt_relay.config.env_manager import EnvManager
from prompt_relay.config.schemas import AppConfig
from prompt_relay.core.app_context import AppContext
from prompt_relay.core.bootstrap import bootstrap
from prompt_relay.core.exceptions import ConfigError
from prompt_relay.providers.router import ProviderRouter


def test_bootstrap_wires_router_and_providers(make_env):
    ctx = bootstrap(config=AppConfig(), env_manager=make_env(), load_env=False)

    assert isinstance(ctx, AppContext)
    assert isinstance(ctx.router, ProviderRouter)
    assert ctx.router.provider_manager is ctx.provider_manager
    assert ctx.router.env_manager is ctx.env_manager
    assert ctx.router.priority == ["groq", "openai", "gemini", "claude"]


def test_bootstrap_loads_yaml_config(tmp_path, make_env):
    config_file = tmp_path / "relay.yaml"
    config_file.write_text(
        yaml.safe_dump(
            {
                "llm": {"priority": ["gemini", "claude"], "request_timeout": 12},
                "providers": {"gemini": {"models": ["gemini-pro"]}},
            }
        )
    )

    ctx = bootstrap(config_file, env_manager=make_env(), load_env=False)

    assert ctx.router.priority == ["gemini", "claude"]
    gemini = ctx.provider_manager.get_provider("gemini")
    assert gemini.models == ["gemini-pro"]
    assert gemini.timeout == 12


def test_bootstrap_reports_bad_config(tmp_path, make_env):
    with pytest.raises(ConfigError):
        bootstrap(tmp_path / "missing.yaml", env_manager=make_env(), load_env=False)


def test_bootstrap_loads_env_files(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GROQ_API_KEY=from-dotenv\n")

    with patch.dict(os.environ, {}):
        ctx = bootstrap(config=AppConfig(), env_manager=EnvManager(env_paths=[env_file]))

        candidate = ctx.provider_manager.get_candidate("groq")
        assert candidate.resolve_credential(ctx.env_manager) == "from-dotenv"
