"""Affinity MCP - a JSON-RPC tool server driving the Affinity creative apps."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    ActionCapability,
    ActionExecutor,
    BatchScheduler,
    BATCH_LIMIT,
    Settings,
    ToolDefinition,
    ToolExecutor,
    ToolRegistry,
)
from .server import LineTransport, RequestDispatcher  # noqa: E402

__all__ = [
    "__version__",
    "ActionCapability",
    "ActionExecutor",
    "BatchScheduler",
    "BATCH_LIMIT",
    "Settings",
    "ToolDefinition",
    "ToolExecutor",
    "ToolRegistry",
    "LineTransport",
    "RequestDispatcher",
]
