"""Run a single external action and fold its result into an ActionOutcome."""

from __future__ import annotations

import logging
from typing import Optional

from ..events import EventSink, LoggerEventSink
from ..exceptions import ActionError
from ..logger import get_logger
from .capability import ActionCapability
from .models import ActionFailed, ActionOutcome, ActionSpec, ActionSucceeded, RequestT, ResultT

logger = get_logger(__name__)


class ActionExecutor:
    """Invokes the action capability exactly once per request.

    A failure reported by the capability is captured in the outcome instead of
    propagating, so one failed action never aborts its siblings in a batch.
    Any other exception escapes to the caller.
    """

    def __init__(self, capability: ActionCapability, events: Optional[EventSink] = None) -> None:
        """Initialize the executor.

        Args:
            capability: The capability performing the external actions.
            events: Optional sink for structured diagnostics.
        """
        self.capability = capability
        self._events = events or LoggerEventSink(logger)

    async def run(self, spec: ActionSpec[RequestT, ResultT], request: RequestT) -> ActionOutcome[ResultT]:
        """Execute one action.

        Args:
            spec: Description of the action kind.
            request: Validated request for the action.

        Returns:
            ``ActionSucceeded`` carrying the capability's result, or ``ActionFailed``
            carrying the rendered failure result and its reason.
        """
        resolved = spec.resolve(request)
        self._events.emit("action.started", kind=spec.kind, capability=self.capability.name)

        try:
            result = await self.capability.perform(spec.kind, resolved)
        except ActionError as exc:
            self._events.emit("action.failed", level=logging.WARNING, kind=spec.kind, reason=exc.reason)
            return ActionFailed(result=spec.on_failure(resolved, exc), reason=exc.reason)

        succeeded = spec.succeeded(result)
        self._events.emit("action.completed", kind=spec.kind, succeeded=succeeded)
        return ActionSucceeded(result=result, succeeded=succeeded)
