"""Route JSON-RPC messages to the fixed protocol methods and the tool registry."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from mcp.types import INVALID_REQUEST

from ..core.config import DEFAULT_SERVER_NAME
from ..core.events import EventSink, LoggerEventSink
from ..core.exceptions import InvalidRequestError, MethodNotFoundError, ParseError, ProtocolError
from ..core.logger import get_logger
from ..core.tools import ToolExecutor, ToolRegistry
from .protocol import (
    CallToolParams,
    InitializeParams,
    Request,
    decode_message,
    error_response,
    initialize_result,
    internal_error_response,
    success_response,
)

logger = get_logger(__name__)

Response = Dict[str, Any]


class RequestDispatcher:
    """
    Handles one inbound message at a time and builds its response envelope.

    Served methods are ``initialize``, the ``initialized`` notification,
    ``tools/list`` and ``tools/call``. Protocol errors are answered with their
    own code and message. Any other failure of a call is logged here and
    answered with a generic internal error, so the caller never sees the
    underlying cause. Notifications are never answered, even when they fail.
    A failed call never affects later calls.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        executor: ToolExecutor,
        version: str,
        server_name: str = DEFAULT_SERVER_NAME,
        events: Optional[EventSink] = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            registry: The frozen tool catalog.
            executor: Executor running ``tools/call``.
            version: Server version reported by ``initialize``.
            server_name: Server name reported by ``initialize``.
            events: Optional sink for structured diagnostics.
        """
        self.registry = registry
        self.executor = executor
        self.version = version
        self.server_name = server_name
        self._events = events or LoggerEventSink(logger)
        self._methods: Dict[str, Callable[[Request], Awaitable[Any]]] = {
            "initialize": self._initialize,
            "initialized": self._initialized,
            "notifications/initialized": self._initialized,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def handle_line(self, line: str) -> Optional[Union[Response, List[Response]]]:
        """Decode one line and handle the message or batch it holds.

        Returns:
            The response (a list for a batch), or None when nothing must be sent.
        """
        try:
            message = decode_message(line)
        except ParseError as exc:
            self._events.emit("request.parse_error", level=logging.WARNING, reason=str(exc.__cause__))
            return error_response(None, exc.code, exc.message)

        if isinstance(message, list):
            return await self._handle_batch(message)
        return await self.handle_message(message)

    async def handle_message(self, message: Any) -> Optional[Response]:
        """Handle one decoded JSON-RPC message.

        Returns:
            The response envelope, or None for a notification.
        """
        try:
            request = Request.from_message(message)
        except InvalidRequestError as exc:
            self._events.emit("request.invalid", level=logging.WARNING)
            request_id = message.get("id") if isinstance(message, dict) else None
            if not isinstance(request_id, (str, int, float)) or isinstance(request_id, bool):
                request_id = None
            return error_response(request_id, exc.code, exc.message)

        self._events.emit("request.received", method=request.method, id=request.id)
        try:
            result = await self._route(request)
        except ProtocolError as exc:
            self._events.emit(
                "request.rejected", level=logging.WARNING, method=request.method, code=exc.code, reason=exc.message
            )
            response = error_response(request.id, exc.code, exc.message)
        except Exception as exc:
            logger.error("Call to '%s' failed: %s", request.method, exc, exc_info=True)
            response = internal_error_response(request.id)
        else:
            response = success_response(request.id, result)

        if request.is_notification:
            return None
        return response

    async def _handle_batch(self, messages: List[Any]) -> Optional[Union[Response, List[Response]]]:
        if not messages:
            return error_response(None, INVALID_REQUEST, "Invalid Request")
        responses = await asyncio.gather(*(self.handle_message(message) for message in messages))
        answered = [response for response in responses if response is not None]
        return answered or None

    async def _route(self, request: Request) -> Any:
        handler = self._methods.get(request.method)
        if handler is None:
            raise MethodNotFoundError(f"Method not found: {request.method}")
        return await handler(request)

    async def _initialize(self, request: Request) -> Dict[str, Any]:
        params = InitializeParams.normalize(request.object_params())
        client_name = params.client_info.name if params.client_info else "unknown"
        self._events.emit(
            "session.initialize", level=logging.INFO, protocol_version=params.protocol_version, client=client_name
        )
        return initialize_result(self.server_name, self.version)

    async def _initialized(self, request: Request) -> None:
        self._events.emit("session.initialized")
        return None

    async def _list_tools(self, request: Request) -> Dict[str, Any]:
        tools = self.registry.list()
        self._events.emit("tools.list", count=len(tools))
        return {"tools": [tool.descriptor() for tool in tools]}

    async def _call_tool(self, request: Request) -> Any:
        params = CallToolParams.normalize(request.object_params())
        return await self.executor.execute(params.name, params.arguments)
