"""Outcome types produced by action execution and batch scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, TypeVar, Union

from pydantic import BaseModel

from ..exceptions import ActionError

RequestT = TypeVar("RequestT", bound=BaseModel)
ResultT = TypeVar("ResultT", bound=BaseModel)


def _unchanged(request: Any) -> Any:
    return request


@dataclass(frozen=True)
class ActionSpec(Generic[RequestT, ResultT]):
    """Describes one kind of external action and how its outcomes are read.

    Attributes:
        kind: Identifier handed to the capability, e.g. ``"open_file"``.
        on_failure: Renders the failure variant of the result from the request and the error.
        succeeded: Tool-specific success predicate applied to a returned result.
        resolve: Fills implicit request fields before the action runs. Must be total.
    """

    kind: str
    on_failure: Callable[[RequestT, ActionError], ResultT]
    succeeded: Callable[[ResultT], bool]
    resolve: Callable[[RequestT], RequestT] = field(default=_unchanged)


@dataclass(frozen=True)
class ActionSucceeded(Generic[ResultT]):
    """The capability returned a result. ``succeeded`` is the tool's own verdict on it."""

    result: ResultT
    succeeded: bool = True

    def payload(self) -> Dict[str, Any]:
        return self.result.model_dump(mode="json")


@dataclass(frozen=True)
class ActionFailed(Generic[ResultT]):
    """The action failed. ``result`` echoes the request's identifying fields."""

    result: ResultT
    reason: str

    @property
    def succeeded(self) -> bool:
        return False

    def payload(self) -> Dict[str, Any]:
        return self.result.model_dump(mode="json")


ActionOutcome = Union[ActionSucceeded[ResultT], ActionFailed[ResultT]]


@dataclass(frozen=True)
class BatchResult(Generic[ResultT]):
    """Aggregated outcome of a batch, index-aligned with the executed requests.

    Attributes:
        success_count: Number of outcomes the tool classified as successful.
        failure_count: Number of remaining outcomes.
        outcomes: One outcome per executed request, in request order.
    """

    success_count: int
    failure_count: int
    outcomes: List[ActionOutcome[ResultT]]

    @classmethod
    def from_outcomes(cls, outcomes: List[ActionOutcome[ResultT]]) -> "BatchResult[ResultT]":
        success_count = sum(1 for outcome in outcomes if outcome.succeeded)
        return cls(
            success_count=success_count,
            failure_count=len(outcomes) - success_count,
            outcomes=list(outcomes),
        )

    @property
    def results(self) -> List[ResultT]:
        return [outcome.result for outcome in self.outcomes]

    def payload(self) -> Dict[str, Any]:
        """Render the batch as the response value of a batched tool."""
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "results": [outcome.payload() for outcome in self.outcomes],
        }
