"""Public exports for the protocol-independent core: tools, actions, config and diagnostics."""

from .actions import (
    ActionCapability,
    UnsupportedActions,
    ActionExecutor,
    ActionSpec,
    ActionSucceeded,
    ActionFailed,
    ActionOutcome,
    BatchResult,
)
from .config import Settings
from .events import EventSink, LoggerEventSink, NullEventSink
from .exceptions import (
    AffinityMCPError,
    ProtocolError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolValidationError,
    InvalidArgumentsError,
    ActionError,
    ActionUnsupportedError,
)
from .logger import get_logger, setup_logging
from .tools import ToolDefinition, ToolRegistry, ToolExecutor, BatchScheduler, BATCH_LIMIT, SchemaValidator

__all__ = [
    "ActionCapability",
    "UnsupportedActions",
    "ActionExecutor",
    "ActionSpec",
    "ActionSucceeded",
    "ActionFailed",
    "ActionOutcome",
    "BatchResult",
    "Settings",
    "EventSink",
    "LoggerEventSink",
    "NullEventSink",
    "AffinityMCPError",
    "ProtocolError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "ToolValidationError",
    "InvalidArgumentsError",
    "ActionError",
    "ActionUnsupportedError",
    "get_logger",
    "setup_logging",
    "ToolDefinition",
    "ToolRegistry",
    "ToolExecutor",
    "BatchScheduler",
    "BATCH_LIMIT",
    "SchemaValidator",
]
