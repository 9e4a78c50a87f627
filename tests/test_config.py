import logging
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from affinity_mcp.core.config import DEFAULT_SERVER_NAME, Settings


def test_defaults() -> None:
    settings = Settings.from_env(environ={}, load_env_file=False)

    assert settings.server_name == DEFAULT_SERVER_NAME == "affinity-mcp"
    assert settings.log_level == logging.WARNING
    assert settings.actions == "auto"
    assert settings.osascript == "osascript"
    assert settings.api_key is None


def test_reads_environment() -> None:
    settings = Settings.from_env(
        environ={
            "MCP_NAME": "my-affinity",
            "AFFINITY_MCP_LOG_LEVEL": "debug",
            "AFFINITY_MCP_ACTIONS": " Unsupported ",
            "AFFINITY_MCP_OSASCRIPT": "/usr/local/bin/osascript",
            "AFFINITY_MCP_API_KEY": "secret",
        },
        load_env_file=False,
    )

    assert settings.server_name == "my-affinity"
    assert settings.log_level == logging.DEBUG
    assert settings.actions == "unsupported"
    assert settings.osascript == "/usr/local/bin/osascript"
    assert settings.api_key == "secret"


def test_invalid_log_level_falls_back_to_warning() -> None:
    settings = Settings.from_env(environ={"AFFINITY_MCP_LOG_LEVEL": "chatty"}, load_env_file=False)

    assert settings.log_level == logging.WARNING


def test_empty_values_are_ignored() -> None:
    settings = Settings.from_env(environ={"MCP_NAME": ""}, load_env_file=False)

    assert settings.server_name == DEFAULT_SERVER_NAME


def test_unknown_backend_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings.from_env(environ={"AFFINITY_MCP_ACTIONS": "powershell"}, load_env_file=False)


def test_loads_dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("MCP_NAME=from-dotenv\nAFFINITY_MCP_ACTIONS=applescript\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MCP_NAME", raising=False)
    monkeypatch.delenv("AFFINITY_MCP_ACTIONS", raising=False)

    try:
        settings = Settings.from_env()
    finally:
        # load_dotenv writes straight into the process environment
        os.environ.pop("MCP_NAME", None)
        os.environ.pop("AFFINITY_MCP_ACTIONS", None)

    assert settings.server_name == "from-dotenv"
    assert settings.actions == "applescript"
