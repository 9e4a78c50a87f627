"""Action capability, specifications and outcomes."""

from .capability import ActionCapability, UnsupportedActions
from .executor import ActionExecutor
from .models import ActionSpec, ActionSucceeded, ActionFailed, ActionOutcome, BatchResult

__all__ = [
    "ActionCapability",
    "UnsupportedActions",
    "ActionExecutor",
    "ActionSpec",
    "ActionSucceeded",
    "ActionFailed",
    "ActionOutcome",
    "BatchResult",
]
