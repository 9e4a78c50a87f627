import asyncio
import random
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest
from pydantic import BaseModel

from affinity_mcp.affinity.models import (
    ActiveDocumentInfo,
    ApplyFilterResult,
    CloseDocumentResult,
    CreateNewResult,
    DrawArtworkResult,
    ExportResult,
    OpenFileResult,
)
from affinity_mcp.cli import build_dispatcher
from affinity_mcp.core import ActionCapability, ActionError, NullEventSink, Settings
from affinity_mcp.server import RequestDispatcher


class FakeCapability(ActionCapability):
    """In-memory capability. Paths in ``failing`` fail, paths in ``crashing`` raise a non-action error."""

    name = "fake"

    def __init__(
        self,
        failing: Optional[Set[str]] = None,
        crashing: Optional[Set[str]] = None,
        max_delay: float = 0.0,
        seed: int = 7,
    ) -> None:
        self.failing = failing or set()
        self.crashing = crashing or set()
        self.max_delay = max_delay
        self.calls: List[Tuple[str, BaseModel]] = []
        self._random = random.Random(seed)

    async def perform(self, kind: str, request: BaseModel) -> BaseModel:
        self.calls.append((kind, request))
        if self.max_delay:
            await asyncio.sleep(self._random.uniform(0, self.max_delay))

        path = getattr(request, "path", None)
        if path in self.crashing:
            raise RuntimeError(f"capability crashed on {path}")
        if path in self.failing:
            raise ActionError(f"cannot reach {path}")

        data: Dict[str, Any] = request.model_dump()
        if kind == "open_file":
            return OpenFileResult(opened=True, app=request.app.app_name, path=path)  # type: ignore[attr-defined]
        if kind == "create_new":
            return CreateNewResult(created=True, app=request.app.app_name)  # type: ignore[attr-defined]
        if kind == "export":
            return ExportResult(exported=True, path=path)
        if kind == "apply_filter":
            return ApplyFilterResult(applied=True, filter_name=data["filter_name"])
        if kind == "get_active_document":
            return ActiveDocumentInfo(is_open=True, name="poster.afdesign", path="/tmp/poster.afdesign")
        if kind == "close_document":
            return CloseDocumentResult(closed=True)
        if kind == "draw_artwork":
            return DrawArtworkResult(created=True, file_path=data["output_path"], app="Affinity Photo")
        raise ValueError(f"Unknown action kind: {kind}")


@pytest.fixture
def capability() -> FakeCapability:
    return FakeCapability()


@pytest.fixture
def settings() -> Settings:
    return Settings(server_name="affinity-test", actions="unsupported")


@pytest.fixture
def dispatcher(settings: Settings, capability: FakeCapability) -> RequestDispatcher:
    return build_dispatcher(settings, capability=capability, events=NullEventSink())
