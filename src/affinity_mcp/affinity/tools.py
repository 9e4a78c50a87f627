"""The ``affinity.*`` tools: handlers registered on the tool registry."""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from ..core.actions import ActionExecutor
from ..core.logger import get_logger
from ..core.tools import BATCH_LIMIT, BatchScheduler, ToolRegistry
from . import actions
from .models import (
    AffinityApp,
    ApplyFilterRequest,
    CreateNewRequest,
    DocumentRequest,
    DrawArtworkRequest,
    ExportFormat,
    ExportRequest,
    OpenFileRequest,
)

logger = get_logger(__name__)


class AffinityTools:
    """
    Handlers of the Affinity tools.

    Single tools run one action through the ``ActionExecutor``; batched tools
    fan their items out through the ``BatchScheduler``. Every handler returns the
    JSON payload of its outcome, so a failed action still yields a result with
    its flag set to false.
    """

    def __init__(self, executor: ActionExecutor, scheduler: BatchScheduler) -> None:
        """
        Initialize the tool set.

        Args:
            executor: Executor running single actions.
            scheduler: Scheduler running batched actions.
        """
        self.executor = executor
        self.scheduler = scheduler

    def register(self, registry: ToolRegistry) -> None:
        """Register all Affinity tools in catalog order."""
        registry.register("affinity.open_file", func=self.open_file, request_model=OpenFileRequest)
        registry.register("affinity.create_new", func=self.create_new, request_model=CreateNewRequest)
        registry.register("affinity.export", func=self.export, request_model=ExportRequest)
        registry.register("affinity.apply_filter", func=self.apply_filter, request_model=ApplyFilterRequest)
        registry.register("affinity.get_active_document", func=self.get_active_document)
        registry.register("affinity.close_document", func=self.close_document)
        registry.register(
            "affinity.batch_open_files",
            func=self.batch_open_files,
            batch_limit=BATCH_LIMIT,
            request_model=OpenFileRequest,
        )
        registry.register("affinity.batch_export", func=self.batch_export, batch_limit=BATCH_LIMIT)
        registry.register("affinity.draw_pikachu", func=self.draw_pikachu, request_model=DrawArtworkRequest)
        logger.debug("Registered Affinity tools.")

    async def open_file(self, path: str, app: Optional[AffinityApp] = None) -> Dict[str, Any]:
        """Open a file in Affinity Photo, Designer or Publisher."""
        outcome = await self.executor.run(actions.OPEN_FILE, OpenFileRequest(path=path, app=app))
        return outcome.payload()

    async def create_new(
        self, app: AffinityApp, width: Optional[int] = None, height: Optional[int] = None
    ) -> Dict[str, Any]:
        """Create a new document in the given Affinity app."""
        outcome = await self.executor.run(
            actions.CREATE_NEW, CreateNewRequest(app=app, width=width, height=height)
        )
        return outcome.payload()

    async def export(self, path: str, format: ExportFormat, quality: Optional[int] = None) -> Dict[str, Any]:
        """Export the front document to a file."""
        outcome = await self.executor.run(actions.EXPORT, ExportRequest(path=path, format=format, quality=quality))
        return outcome.payload()

    async def apply_filter(self, filter_name: str, intensity: Optional[int] = None) -> Dict[str, Any]:
        """Apply a filter to the front document."""
        outcome = await self.executor.run(
            actions.APPLY_FILTER, ApplyFilterRequest(filter_name=filter_name, intensity=intensity)
        )
        return outcome.payload()

    async def get_active_document(self) -> Dict[str, Any]:
        """Report the name and path of the front document, if one is open."""
        outcome = await self.executor.run(actions.GET_ACTIVE_DOCUMENT, DocumentRequest())
        return outcome.payload()

    async def close_document(self) -> Dict[str, Any]:
        """Close the front document."""
        outcome = await self.executor.run(actions.CLOSE_DOCUMENT, DocumentRequest())
        return outcome.payload()

    async def batch_open_files(
        self,
        paths: Annotated[
            List[str],
            Field(
                description=f"Files to open concurrently. At most {BATCH_LIMIT} are opened; extra paths are ignored.",
                json_schema_extra={"maxItems": BATCH_LIMIT},
            ),
        ],
        app: Optional[AffinityApp] = None,
    ) -> Dict[str, Any]:
        """
        Open several files concurrently.

        Returns success and failure counts and one open result per path, in the order of ``paths``.
        """
        requests = [OpenFileRequest(path=path, app=app) for path in paths]
        result = await self.scheduler.run_batch(actions.OPEN_FILE, requests, limit=BATCH_LIMIT)
        return result.payload()

    async def batch_export(
        self,
        exports: Annotated[
            List[ExportRequest],
            Field(
                description=f"Exports to run concurrently. At most {BATCH_LIMIT} run; extra entries are ignored.",
                json_schema_extra={"maxItems": BATCH_LIMIT},
            ),
        ],
    ) -> Dict[str, Any]:
        """
        Export the front document to several files concurrently.

        Returns success and failure counts and one export result per entry, in the order of ``exports``.
        """
        result = await self.scheduler.run_batch(actions.EXPORT, exports, limit=BATCH_LIMIT)
        return result.payload()

    async def draw_pikachu(
        self, output_path: Optional[str] = None, width: Optional[int] = None, height: Optional[int] = None
    ) -> Dict[str, Any]:
        """Draw a Pikachu as SVG artwork and open it in Affinity."""
        outcome = await self.executor.run(
            actions.DRAW_ARTWORK, DrawArtworkRequest(output_path=output_path, width=width, height=height)
        )
        return outcome.payload()
