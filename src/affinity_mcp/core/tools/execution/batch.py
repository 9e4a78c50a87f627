"""Bounded-parallel execution of independent actions with an order-preserving result."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from ...actions import ActionExecutor, ActionFailed, ActionOutcome, ActionSpec, BatchResult
from ...actions.models import RequestT, ResultT
from ...events import EventSink, LoggerEventSink
from ...exceptions import ActionError
from ...logger import get_logger

logger = get_logger(__name__)

# Maximum number of items a batched tool runs concurrently.
BATCH_LIMIT = 16


class BatchScheduler:
    """Runs up to ``limit`` actions concurrently and aggregates their outcomes.

    Requests beyond the limit are dropped silently (after logging); the limit is
    the concurrency itself, there is no queue behind it. Every item runs in its
    own isolation boundary, so an unexpected exception in one item becomes that
    item's failure outcome and leaves the others untouched. ``results[i]`` always
    belongs to ``requests[i]`` whatever order the items finish in.
    """

    def __init__(self, executor: ActionExecutor, events: Optional[EventSink] = None) -> None:
        """Initialize the scheduler.

        Args:
            executor: Executor used for every item.
            events: Optional sink for structured diagnostics.
        """
        self._executor = executor
        self._events = events or LoggerEventSink(logger)

    async def run_batch(
        self,
        spec: ActionSpec[RequestT, ResultT],
        requests: Sequence[RequestT],
        limit: int = BATCH_LIMIT,
    ) -> BatchResult[ResultT]:
        """Execute a batch.

        Args:
            spec: The action every item runs.
            requests: Ordered item requests.
            limit: Fan-out limit; extra requests are truncated, not rejected.

        Returns:
            The aggregated, index-aligned batch result.
        """
        if limit < 1:
            raise ValueError(f"Batch limit must be positive, got {limit}.")

        items = list(requests)
        if len(items) > limit:
            self._events.emit(
                "batch.truncated", level=logging.WARNING, kind=spec.kind, received=len(items), limit=limit
            )
            items = items[:limit]

        self._events.emit("batch.started", level=logging.INFO, kind=spec.kind, items=len(items))

        # gather returns results in argument order, independent of completion order.
        outcomes = await asyncio.gather(*(self._run_item(spec, index, request) for index, request in enumerate(items)))

        result = BatchResult.from_outcomes(list(outcomes))
        self._events.emit(
            "batch.completed",
            level=logging.INFO,
            kind=spec.kind,
            success_count=result.success_count,
            failure_count=result.failure_count,
        )
        return result

    async def _run_item(
        self, spec: ActionSpec[RequestT, ResultT], index: int, request: RequestT
    ) -> ActionOutcome[ResultT]:
        try:
            return await self._executor.run(spec, request)
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
            self._events.emit("batch.item_crashed", level=logging.ERROR, kind=spec.kind, index=index, reason=reason)
            return ActionFailed(result=spec.on_failure(request, ActionError(reason)), reason=reason)
