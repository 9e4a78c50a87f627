"""Tool execution and batch scheduling."""

from .executor import ToolExecutor
from .batch import BatchScheduler, BATCH_LIMIT

__all__ = ["ToolExecutor", "BatchScheduler", "BATCH_LIMIT"]
