"""Process configuration read from the environment (and an optional ``.env`` file)."""

import logging
import os
from typing import Literal, Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .logger import get_logger, parse_level

logger = get_logger(__name__)

DEFAULT_SERVER_NAME = "affinity-mcp"

ActionsBackend = Literal["auto", "applescript", "unsupported"]


class Settings(BaseModel):
    """
    Runtime settings of the server.

    Attributes:
        server_name: Name reported in the ``initialize`` handshake (``MCP_NAME``).
        log_level: Logging level for stderr output (``AFFINITY_MCP_LOG_LEVEL``).
        actions: Which action capability to run (``AFFINITY_MCP_ACTIONS``).
            ``auto`` picks AppleScript on macOS and the unsupported variant elsewhere.
        osascript: Executable used to run AppleScript (``AFFINITY_MCP_OSASCRIPT``).
        api_key: Credential for the design service (``AFFINITY_MCP_API_KEY``).
    """

    server_name: str = Field(default=DEFAULT_SERVER_NAME, min_length=1)
    log_level: int = Field(default=logging.WARNING)
    actions: ActionsBackend = Field(default="auto")
    osascript: str = Field(default="osascript", min_length=1)
    api_key: Optional[str] = Field(default=None)

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_level(cls, value: object) -> int:
        if isinstance(value, (str, int)):
            return parse_level(value)
        return logging.WARNING

    @field_validator("actions", mode="before")
    @classmethod
    def _normalize_actions(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
            load_env_file: Whether to load a ``.env`` file into the process environment first.

        Returns:
            The parsed settings.
        """
        if load_env_file:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                load_dotenv(env_file)
                logger.debug("Loaded environment from %s", env_file)

        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for key, field_name in (
            ("MCP_NAME", "server_name"),
            ("AFFINITY_MCP_LOG_LEVEL", "log_level"),
            ("AFFINITY_MCP_ACTIONS", "actions"),
            ("AFFINITY_MCP_OSASCRIPT", "osascript"),
            ("AFFINITY_MCP_API_KEY", "api_key"),
        ):
            raw = env.get(key)
            if raw:
                values[field_name] = raw
        return cls(**values)
