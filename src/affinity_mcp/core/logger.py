"""Logging utilities for the affinity MCP server."""

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "affinity_mcp"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the server.

    Args:
        name: Optional sub-logger name. If None, returns the root server logger.

    Returns:
        The requested logger.
    """
    if name:
        if name.startswith(f"{_LOGGER_NAME}.") or name == _LOGGER_NAME:
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def parse_level(value: str | int, default: int = logging.WARNING) -> int:
    """Translate a level name such as ``"debug"`` into a logging level.

    Unknown names resolve to ``default``.
    """
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.WARNING,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream: TextIO | None = None,
) -> None:
    """Setup default logging configuration for the server process.

    A single StreamHandler is attached to the server's root logger. It writes to
    stderr unless another stream is given, because stdout carries the JSON-RPC
    channel and must never receive log lines.

    Args:
        level: Logging level.
        format_str: Log format string.
        stream: Destination stream, stderr by default.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    # Avoid adding multiple handlers if called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
