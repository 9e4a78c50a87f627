"""JSON-RPC 2.0 envelopes and the typed parameters of the fixed MCP methods."""

import json
from typing import Any, Dict, Optional, Union

from mcp.types import (
    INTERNAL_ERROR,
    ErrorData,
    Implementation,
    InitializeResult,
    ServerCapabilities,
    ToolsCapability,
)
from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.exceptions import InvalidParamsError, InvalidRequestError, ParseError
from ..core.logger import get_logger

logger = get_logger(__name__)

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"
INTERNAL_ERROR_MESSAGE = "Internal error"

RequestId = Union[str, int, float, None]


def decode_message(line: str) -> Any:
    """Decode one line of input.

    Raises:
        ParseError: If the line is not valid JSON.
    """
    try:
        return json.loads(line)
    except json.JSONDecodeError as exc:
        raise ParseError("Parse error") from exc


class Request(BaseModel):
    """An inbound JSON-RPC message. ``is_notification`` is true when it carries no id."""

    model_config = ConfigDict(frozen=True)

    method: str
    params: Any = None
    id: RequestId = None
    is_notification: bool = False

    @classmethod
    def from_message(cls, message: Any) -> "Request":
        """Validate the envelope of one decoded message.

        Raises:
            InvalidRequestError: If the message is not a request object with a method name.
        """
        if not isinstance(message, dict):
            raise InvalidRequestError("Invalid Request")
        method = message.get("method")
        if not isinstance(method, str) or not method:
            raise InvalidRequestError("Invalid Request")
        request_id = message.get("id")
        if request_id is not None and (isinstance(request_id, bool) or not isinstance(request_id, (str, int, float))):
            raise InvalidRequestError("Invalid Request")
        return cls(
            method=method,
            params=message.get("params"),
            id=request_id,
            is_notification="id" not in message,
        )

    def object_params(self) -> Dict[str, Any]:
        """Return ``params`` as an object; absent params read as empty."""
        if self.params is None:
            return {}
        if not isinstance(self.params, dict):
            raise InvalidParamsError("params must be an object")
        return self.params


class ClientInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = "unknown"
    version: Optional[str] = None


class InitializeParams(BaseModel):
    """Canonical ``initialize`` parameters.

    Callers may spell the fields ``protocolVersion``/``clientInfo`` or
    ``protocol_version``/``client_info``; both map onto this shape. Client
    info is informational only: a malformed one reads as absent.
    """

    protocol_version: str
    client_info: Optional[ClientInfo] = None

    @classmethod
    def normalize(cls, params: Dict[str, Any]) -> "InitializeParams":
        """Read either naming convention.

        Raises:
            InvalidParamsError: If no protocol version is present under either name.
        """
        protocol_version = _first_present(params, "protocolVersion", "protocol_version")
        if not isinstance(protocol_version, str):
            raise InvalidParamsError("missing protocolVersion")

        return cls(
            protocol_version=protocol_version,
            client_info=_client_info(_first_present(params, "clientInfo", "client_info")),
        )


def _first_present(params: Dict[str, Any], *names: str) -> Any:
    for name in names:
        if params.get(name) is not None:
            return params[name]
    return None


def _client_info(value: Any) -> Optional[ClientInfo]:
    if value is None:
        return None
    try:
        return ClientInfo.model_validate(value)
    except ValidationError as exc:
        logger.debug("Ignoring malformed client info: %s", exc)
        return None


class CallToolParams(BaseModel):
    name: str
    arguments: Any = None

    @classmethod
    def normalize(cls, params: Dict[str, Any]) -> "CallToolParams":
        """Read the tool name and raw arguments of a ``tools/call``.

        Raises:
            InvalidParamsError: If the tool name is missing.
        """
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParamsError("missing tool name")
        return cls(name=name, arguments=params.get("arguments"))


def initialize_result(server_name: str, version: str) -> Dict[str, Any]:
    """Build the fixed ``initialize`` result; the tool list never changes."""
    result = InitializeResult(
        protocolVersion=PROTOCOL_VERSION,
        capabilities=ServerCapabilities(tools=ToolsCapability(listChanged=False)),
        serverInfo=Implementation(name=server_name, version=version),
    )
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


def success_response(request_id: RequestId, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: RequestId, code: int, message: str) -> Dict[str, Any]:
    error = ErrorData(code=code, message=message)
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.model_dump(mode="json", exclude_none=True)}


def internal_error_response(request_id: RequestId) -> Dict[str, Any]:
    return error_response(request_id, INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
