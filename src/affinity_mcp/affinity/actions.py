"""Action specifications of the Affinity tools: target resolution, failure rendering, success predicates."""

from __future__ import annotations

import tempfile
from pathlib import Path

from ..core.actions import ActionSpec
from ..core.exceptions import ActionError, ActionUnsupportedError
from .detection import DEFAULT_APP, detect_app_from_path
from .models import (
    ActiveDocumentInfo,
    ApplyFilterRequest,
    ApplyFilterResult,
    CloseDocumentResult,
    CreateNewRequest,
    CreateNewResult,
    DocumentRequest,
    DrawArtworkRequest,
    DrawArtworkResult,
    ExportRequest,
    ExportResult,
    OpenFileRequest,
    OpenFileResult,
)

UNSUPPORTED_APP = "Unsupported"

DEFAULT_DOCUMENT_WIDTH = 1920
DEFAULT_DOCUMENT_HEIGHT = 1080
DEFAULT_EXPORT_QUALITY = 90
DEFAULT_ARTWORK_SIZE = 800
ARTWORK_FILENAME = "pikachu.svg"


def _failed_app(error: ActionError, app_name: str) -> str:
    return UNSUPPORTED_APP if isinstance(error, ActionUnsupportedError) else app_name


def _resolve_open(request: OpenFileRequest) -> OpenFileRequest:
    if request.app is not None:
        return request
    return request.model_copy(update={"app": detect_app_from_path(request.path)})


def _failed_open(request: OpenFileRequest, error: ActionError) -> OpenFileResult:
    app = request.app or detect_app_from_path(request.path)
    return OpenFileResult(opened=False, app=_failed_app(error, app.app_name), path=request.path)


def _resolve_create(request: CreateNewRequest) -> CreateNewRequest:
    return request.model_copy(
        update={
            "width": request.width or DEFAULT_DOCUMENT_WIDTH,
            "height": request.height or DEFAULT_DOCUMENT_HEIGHT,
        }
    )


def _resolve_export(request: ExportRequest) -> ExportRequest:
    if request.quality is not None:
        return request
    return request.model_copy(update={"quality": DEFAULT_EXPORT_QUALITY})


def _resolve_artwork(request: DrawArtworkRequest) -> DrawArtworkRequest:
    output_path = request.output_path or str(Path(tempfile.gettempdir()) / ARTWORK_FILENAME)
    return request.model_copy(
        update={
            "output_path": output_path,
            "width": request.width or DEFAULT_ARTWORK_SIZE,
            "height": request.height or DEFAULT_ARTWORK_SIZE,
        }
    )


OPEN_FILE: ActionSpec[OpenFileRequest, OpenFileResult] = ActionSpec(
    kind="open_file",
    resolve=_resolve_open,
    on_failure=_failed_open,
    succeeded=lambda result: result.opened,
)

CREATE_NEW: ActionSpec[CreateNewRequest, CreateNewResult] = ActionSpec(
    kind="create_new",
    resolve=_resolve_create,
    on_failure=lambda request, error: CreateNewResult(created=False, app=_failed_app(error, request.app.app_name)),
    succeeded=lambda result: result.created,
)

EXPORT: ActionSpec[ExportRequest, ExportResult] = ActionSpec(
    kind="export",
    resolve=_resolve_export,
    on_failure=lambda request, error: ExportResult(exported=False, path=request.path),
    succeeded=lambda result: result.exported,
)

APPLY_FILTER: ActionSpec[ApplyFilterRequest, ApplyFilterResult] = ActionSpec(
    kind="apply_filter",
    on_failure=lambda request, error: ApplyFilterResult(applied=False, filter_name=request.filter_name),
    succeeded=lambda result: result.applied,
)

GET_ACTIVE_DOCUMENT: ActionSpec[DocumentRequest, ActiveDocumentInfo] = ActionSpec(
    kind="get_active_document",
    on_failure=lambda request, error: ActiveDocumentInfo(is_open=False),
    succeeded=lambda result: True,
)

CLOSE_DOCUMENT: ActionSpec[DocumentRequest, CloseDocumentResult] = ActionSpec(
    kind="close_document",
    on_failure=lambda request, error: CloseDocumentResult(closed=False),
    succeeded=lambda result: result.closed,
)

DRAW_ARTWORK: ActionSpec[DrawArtworkRequest, DrawArtworkResult] = ActionSpec(
    kind="draw_artwork",
    resolve=_resolve_artwork,
    on_failure=lambda request, error: DrawArtworkResult(
        created=False,
        file_path=request.output_path or "",
        app=_failed_app(error, DEFAULT_APP.app_name),
    ),
    succeeded=lambda result: result.created,
)
