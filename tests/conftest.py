"""
Shared test fixtures for rtk-hook tests.
"""

import json

import pytest

from rtk_hook.core import config as config_module
from rtk_hook.core import stats as stats_module
from rtk_hook.core.config import Config, configure_logging


@pytest.fixture
def hook_input():
    """Factory for generating hook input JSON."""

    def _make(command: str, tool_name: str = "Bash", **extra) -> str:
        return json.dumps({"tool_name": tool_name, "tool_input": {"command": command}, **extra})

    return _make


@pytest.fixture
def rtk_home(tmp_path, monkeypatch):
    """Point config, logs and session stats at a temp directory."""
    state_dir = tmp_path / ".rtk-hook"
    monkeypatch.setattr(config_module, "USER_CONFIG", state_dir / "config.json")
    monkeypatch.setattr(stats_module, "SESSIONS_DIR", state_dir / "sessions")
    monkeypatch.delenv(config_module.ENV_CONFIG, raising=False)
    return state_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave logging unconfigured after each test."""
    yield
    configure_logging(Config())


def is_rewritten(result: dict) -> bool:
    """Check if a hook result swaps in a new command."""
    output = result.get("hookSpecificOutput", {})
    return "updatedInput" in output


def rewritten_command(result: dict) -> str | None:
    """Extract the rewritten command from a hook result."""
    return result.get("hookSpecificOutput", {}).get("updatedInput", {}).get("command")
