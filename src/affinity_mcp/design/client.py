"""Client of the external design service (stub)."""

import uuid
from typing import Optional

from pydantic import BaseModel

from ..core.logger import get_logger

logger = get_logger(__name__)

DESIGN_ID_PREFIX = "demo-"


class DesignCreated(BaseModel):
    design_id: str
    url: Optional[str] = None


class DesignServiceClient:
    """
    Creates designs on the design service.

    This client does not talk to the network yet: every call returns a fresh
    ``demo-<uuid4>`` identifier and no URL.
    """

    def __init__(self, api_key: Optional[str] = None) -> None:
        self.api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def create(
        self,
        title: str,
        template_id: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> DesignCreated:
        """Create a design and return its identifier."""
        logger.info(
            "Creating design '%s' (template=%s, size=%sx%s, api key %s)",
            title,
            template_id,
            width,
            height,
            "present" if self.configured else "missing",
        )
        return DesignCreated(design_id=f"{DESIGN_ID_PREFIX}{uuid.uuid4()}")
