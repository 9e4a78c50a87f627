from typing import Any, Callable, Dict, Optional, Type

from mcp.types import Tool as MCPTool
from pydantic import BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    """
    Represents a tool exposed by the server.

    Attributes:
        name: The unique, stable name of the tool.
        description: Human-readable description shown to callers.
        func: The (async) handler implementing the tool.
        parameters: JSON schema describing the tool's arguments.
        args_model: Pydantic model used to deserialize and validate arguments.
        batch_limit: Fan-out limit for tools that run their items as a batch.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    func: Callable[..., Any]
    parameters: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})
    args_model: Optional[Type[BaseModel]] = None
    batch_limit: Optional[int] = None

    @property
    def is_batch(self) -> bool:
        return self.batch_limit is not None

    def descriptor(self) -> Dict[str, Any]:
        """Render the tool as an MCP tool descriptor for ``tools/list``."""
        tool = MCPTool(name=self.name, description=self.description, inputSchema=self.parameters)
        return tool.model_dump(mode="json", by_alias=True, exclude_none=True)
