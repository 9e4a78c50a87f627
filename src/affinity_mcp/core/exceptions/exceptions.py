"""
Custom exception classes for the affinity MCP server.

This module defines the hierarchy used across request parsing, tool
registration, argument validation and action execution. Protocol errors carry
the JSON-RPC code they are reported with; everything else is reported to the
caller as a generic internal error.
"""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND, PARSE_ERROR


class AffinityMCPError(Exception):
    """Base exception for all server errors."""

    pass


# --- Protocol level -------------------------------------------------------


class ProtocolError(AffinityMCPError):
    """Raised when an inbound message cannot be routed. The message is caller-facing."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ParseError(ProtocolError):
    """Raised when a line is not valid JSON."""

    code = PARSE_ERROR


class InvalidRequestError(ProtocolError):
    """Raised when a message is not a JSON-RPC request object."""

    code = INVALID_REQUEST


class MethodNotFoundError(ProtocolError):
    """Raised when the requested method is not served."""

    code = METHOD_NOT_FOUND


class InvalidParamsError(ProtocolError):
    """Raised when method parameters are missing or malformed."""

    code = INVALID_PARAMS


# --- Tools ----------------------------------------------------------------


class ToolError(AffinityMCPError):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(ToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(ToolError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' not found in the registry.")


class ToolValidationError(ToolError):
    """Raised when a tool definition is invalid."""

    pass


class InvalidArgumentsError(ToolError):
    """Raised when call arguments do not fit the tool's request shape."""

    def __init__(self, tool_name: str, reason: str) -> None:
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"Invalid arguments for tool '{tool_name}': {reason}")


class ToolExecutionError(ToolError):
    """Raised when a tool handler fails outside of its action outcome."""

    pass


# --- Actions --------------------------------------------------------------


class ActionError(AffinityMCPError):
    """Raised by an action capability when the external action fails."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ActionUnsupportedError(ActionError):
    """Raised by the capability variant used where actions cannot run."""

    pass
