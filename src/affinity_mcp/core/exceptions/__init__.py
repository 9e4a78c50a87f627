"""Export the exception hierarchy used across protocol, tool and action paths."""

from .exceptions import (
    AffinityMCPError,
    ProtocolError,
    ParseError,
    InvalidRequestError,
    MethodNotFoundError,
    InvalidParamsError,
    ToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
    InvalidArgumentsError,
    ToolExecutionError,
    ActionError,
    ActionUnsupportedError,
)

__all__ = [
    "AffinityMCPError",
    "ProtocolError",
    "ParseError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "ToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "InvalidArgumentsError",
    "ToolExecutionError",
    "ActionError",
    "ActionUnsupportedError",
]
