"""Resolve a tool call, deserialize its arguments and invoke the handler."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from ...events import EventSink, LoggerEventSink
from ...exceptions import AffinityMCPError, InvalidArgumentsError, ToolExecutionError
from ...logger import get_logger
from ..models import ToolDefinition
from ..registry import ToolRegistry

logger = get_logger(__name__)


class ToolExecutor:
    """Executes a call against the tool registry.

    Arguments are normalized into a JSON object, validated against the tool's
    argument model and handed to the handler as keyword arguments. A shape
    mismatch raises ``InvalidArgumentsError`` before the handler (and thus any
    external action) runs.
    """

    def __init__(self, registry: ToolRegistry, events: Optional[EventSink] = None) -> None:
        """Initialize the executor.

        Args:
            registry: Tool registry used to resolve tool definitions.
            events: Optional sink for structured diagnostics.
        """
        self._registry = registry
        self._events = events or LoggerEventSink(logger)

    async def execute(self, tool_name: str, raw_arguments: Any) -> Any:
        """Execute one tool call.

        Args:
            tool_name: Name of the tool to run.
            raw_arguments: Arguments as received (object, JSON string, or None).

        Returns:
            The handler's result rendered as a JSON-compatible value.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            InvalidArgumentsError: If the arguments do not fit the tool's shape.
            ToolExecutionError: If the handler itself raises.
        """
        tool = self._registry.resolve(tool_name)
        kwargs = self.deserialize(tool, raw_arguments)

        self._events.emit("tool.started", tool=tool_name, batch=tool.is_batch)
        try:
            result = await self._invoke(tool, kwargs)
        except AffinityMCPError:
            raise
        except Exception as exc:
            self._events.emit("tool.crashed", level=logging.ERROR, tool=tool_name, reason=repr(exc))
            raise ToolExecutionError(f"Tool '{tool_name}' failed: {exc}") from exc
        self._events.emit("tool.completed", tool=tool_name)
        return self._render(result)

    def deserialize(self, tool: ToolDefinition, raw_arguments: Any) -> Dict[str, Any]:
        """Turn raw call arguments into validated handler keyword arguments.

        Args:
            tool: The tool definition.
            raw_arguments: Arguments as received.

        Returns:
            Keyword arguments for the handler, with nested models already constructed.

        Raises:
            InvalidArgumentsError: If normalization or validation fails.
        """
        arguments = self._normalize_function_args(tool.name, raw_arguments)
        if tool.args_model is None:
            return arguments

        try:
            validated = tool.args_model.model_validate(arguments)
        except ValidationError as exc:
            reason = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
            )
            self._events.emit("tool.invalid_arguments", level=logging.WARNING, tool=tool.name, reason=reason)
            raise InvalidArgumentsError(tool.name, reason) from exc

        return {name: getattr(validated, name) for name in type(validated).model_fields}

    def _normalize_function_args(self, tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize call arguments into a dictionary.

        Handles JSON strings, dictionaries, or None values.

        Args:
            tool_name: Name of the tool (for error reporting).
            raw_args: The raw arguments (dict, string, or None).

        Returns:
            A dictionary of normalized arguments.

        Raises:
            InvalidArgumentsError: If arguments cannot be parsed or are not an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, dict):
            return raw_args

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                raise InvalidArgumentsError(tool_name, f"arguments are not valid JSON: {exc}") from exc

            if parsed is None:
                return {}
            if isinstance(parsed, dict):
                return parsed

        raise InvalidArgumentsError(tool_name, "arguments must be a JSON object")

    @staticmethod
    async def _invoke(tool: ToolDefinition, kwargs: Dict[str, Any]) -> Any:
        if inspect.iscoroutinefunction(tool.func):
            return await tool.func(**kwargs)
        result = await asyncio.to_thread(tool.func, **kwargs)
        # Callables that only return an awaitable (e.g. partials of async functions).
        if inspect.isawaitable(result):
            return await result
        return result

    @staticmethod
    def _render(result: Any) -> Any:
        if isinstance(result, BaseModel):
            return result.model_dump(mode="json")
        return result
