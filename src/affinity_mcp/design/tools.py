"""The ``canva.*`` tools backed by the design service client."""

from typing import Annotated, Any, Dict, Optional

from pydantic import Field

from ..core.tools import ToolRegistry
from .client import DesignServiceClient


class DesignTools:
    """Handlers of the design-service tools."""

    def __init__(self, client: DesignServiceClient) -> None:
        self.client = client

    def register(self, registry: ToolRegistry) -> None:
        registry.register("canva.create_design", func=self.create_design)

    async def create_design(
        self,
        title: Annotated[str, Field(min_length=1, description="Title of the new design.")],
        template_id: Annotated[Optional[str], Field(description="Template to start from.")] = None,
        width: Annotated[Optional[int], Field(ge=1, description="Design width in pixels.")] = None,
        height: Annotated[Optional[int], Field(ge=1, description="Design height in pixels.")] = None,
    ) -> Dict[str, Any]:
        """Create a new design on the design service."""
        created = await self.client.create(title, template_id=template_id, width=width, height=height)
        return created.model_dump(mode="json")
