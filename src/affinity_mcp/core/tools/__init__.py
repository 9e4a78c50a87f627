from .models import ToolDefinition
from .registry import ToolRegistry
from .execution import ToolExecutor, BatchScheduler, BATCH_LIMIT
from .schema import SchemaValidator

__all__ = [
    "ToolDefinition",
    "ToolRegistry",
    "ToolExecutor",
    "BatchScheduler",
    "BATCH_LIMIT",
    "SchemaValidator",
]
