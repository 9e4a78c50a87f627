"""Structured event sinks passed to the dispatcher, executors and scheduler.

Components never reach for a process-wide logger to report what happened during
a call. They receive an ``EventSink`` and emit named events with keyword fields;
the default sink renders those events through the standard logging tree.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .logger import get_logger


class EventSink(Protocol):
    """Receiver for structured diagnostic events."""

    def emit(self, event: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
        """Record a single event.

        Args:
            event: Short dotted event name, e.g. ``"batch.completed"``.
            level: Logging severity of the event.
            **fields: Event payload.
        """
        ...


class LoggerEventSink:
    """Forward events to a ``logging.Logger`` as ``event key=value ...`` lines."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("events")

    def emit(self, event: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if not fields:
            self._logger.log(level, "%s", event)
            return
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self._logger.log(level, "%s %s", event, rendered)


class NullEventSink:
    """Discard every event."""

    def emit(self, event: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
        return None
