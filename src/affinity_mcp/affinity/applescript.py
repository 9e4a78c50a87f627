"""Action capability driving the Affinity apps through AppleScript (macOS)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel

from ..core.actions import ActionCapability
from ..core.exceptions import ActionError
from ..core.logger import get_logger
from .actions import DEFAULT_ARTWORK_SIZE
from .artwork import generate_pikachu_svg
from .detection import DEFAULT_APP, detect_app_from_path
from .models import (
    ActiveDocumentInfo,
    AffinityApp,
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

logger = get_logger(__name__)

# Application driven by actions that act on "the front document".
DOCUMENT_APP = DEFAULT_APP

_NO_DOCUMENT = "||"


def quote(value: str) -> str:
    """Quote ``value`` as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AppleScriptActions(ActionCapability):
    """
    Performs Affinity actions by running AppleScript through ``osascript``.

    Each action runs exactly one script (``draw_artwork`` additionally runs
    ``open``). A non-zero exit status is reported as ``ActionError`` carrying the
    script's stderr.
    """

    name = "applescript"

    def __init__(self, osascript: str = "osascript", open_command: str = "open") -> None:
        """Initialize the capability.

        Args:
            osascript: Executable used to run AppleScript.
            open_command: Executable used to open files in a given application.
        """
        self.osascript = osascript
        self.open_command = open_command
        self._handlers: Dict[str, Callable[[BaseModel], Awaitable[BaseModel]]] = {
            "open_file": self._open_file,  # type: ignore[dict-item]
            "create_new": self._create_new,  # type: ignore[dict-item]
            "export": self._export,  # type: ignore[dict-item]
            "apply_filter": self._apply_filter,  # type: ignore[dict-item]
            "get_active_document": self._get_active_document,  # type: ignore[dict-item]
            "close_document": self._close_document,  # type: ignore[dict-item]
            "draw_artwork": self._draw_artwork,  # type: ignore[dict-item]
        }

    async def perform(self, kind: str, request: BaseModel) -> BaseModel:
        handler = self._handlers.get(kind)
        if handler is None:
            raise ValueError(f"Unknown action kind: {kind}")
        return await handler(request)

    async def run_script(self, script: str) -> str:
        """Run an AppleScript and return its trimmed stdout.

        Raises:
            ActionError: If ``osascript`` cannot be started or exits with an error.
        """
        return await self._run([self.osascript, "-e", script])

    async def _run(self, argv: List[str]) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ActionError(f"Failed to start '{argv[0]}': {exc}") from exc

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip() or f"exit status {process.returncode}"
            logger.error("'%s' failed: %s", argv[0], message)
            raise ActionError(f"'{argv[0]}' failed: {message}")
        return stdout.decode(errors="replace").strip()

    async def _open_file(self, request: OpenFileRequest) -> OpenFileResult:
        app = request.app or detect_app_from_path(request.path)
        try:
            resolved = Path(request.path).expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise ActionError(f"Cannot resolve path '{request.path}': {exc}") from exc

        script = (
            f"tell application {quote(app.app_name)}\n"
            "    activate\n"
            f"    open POSIX file {quote(str(resolved))}\n"
            "end tell"
        )
        await self.run_script(script)
        logger.debug("Opened %s in %s", request.path, app.app_name)
        return OpenFileResult(opened=True, app=app.app_name, path=request.path)

    async def _create_new(self, request: CreateNewRequest) -> CreateNewResult:
        script = (
            f"tell application {quote(request.app.app_name)}\n"
            "    activate\n"
            f"    make new document with properties {{width:{request.width}, height:{request.height}}}\n"
            "end tell"
        )
        await self.run_script(script)
        return CreateNewResult(created=True, app=request.app.app_name)

    async def _export(self, request: ExportRequest) -> ExportResult:
        target = Path(request.path).expanduser().resolve()
        script = (
            f"tell application {quote(DOCUMENT_APP.app_name)}\n"
            "    activate\n"
            "    if (count of documents) > 0 then\n"
            "        tell front document\n"
            f"            export in file {quote(str(target))} as {quote(request.format.value)}"
            f" with options {{quality:{request.quality}}}\n"
            "        end tell\n"
            "    else\n"
            '        error "No document is open"\n'
            "    end if\n"
            "end tell"
        )
        await self.run_script(script)
        return ExportResult(exported=True, path=request.path)

    async def _apply_filter(self, request: ApplyFilterRequest) -> ApplyFilterResult:
        script = (
            f"tell application {quote(DOCUMENT_APP.app_name)}\n"
            "    activate\n"
            "    if (count of documents) > 0 then\n"
            "        tell front document\n"
            f"            log {quote('Applying filter ' + request.filter_name)}\n"
            "        end tell\n"
            "    else\n"
            '        error "No document is open"\n'
            "    end if\n"
            "end tell"
        )
        await self.run_script(script)
        return ApplyFilterResult(applied=True, filter_name=request.filter_name)

    async def _get_active_document(self, request: DocumentRequest) -> ActiveDocumentInfo:
        script = (
            f"tell application {quote(DOCUMENT_APP.app_name)}\n"
            "    if (count of documents) > 0 then\n"
            "        tell front document\n"
            '            return (name as text) & "|" & (path as text)\n'
            "        end tell\n"
            "    else\n"
            f"        return {quote(_NO_DOCUMENT)}\n"
            "    end if\n"
            "end tell"
        )
        output = await self.run_script(script)
        return parse_active_document(output)

    async def _close_document(self, request: DocumentRequest) -> CloseDocumentResult:
        script = (
            f"tell application {quote(DOCUMENT_APP.app_name)}\n"
            "    if (count of documents) > 0 then\n"
            "        close front document\n"
            "    end if\n"
            "end tell"
        )
        await self.run_script(script)
        return CloseDocumentResult(closed=True)

    async def _draw_artwork(self, request: DrawArtworkRequest) -> DrawArtworkResult:
        output_path = Path(request.output_path or "").expanduser()
        width = request.width or DEFAULT_ARTWORK_SIZE
        height = request.height or DEFAULT_ARTWORK_SIZE
        try:
            await asyncio.to_thread(output_path.write_text, generate_pikachu_svg(width, height), "utf-8")
        except OSError as exc:
            raise ActionError(f"Cannot write '{output_path}': {exc}") from exc
        logger.info("Wrote artwork to %s", output_path)

        file_path = str(output_path.resolve())
        app = await self._open_with_first_app(file_path, [AffinityApp.PHOTO, AffinityApp.DESIGNER])
        return DrawArtworkResult(created=True, file_path=str(output_path), app=app.app_name)

    async def _open_with_first_app(self, file_path: str, apps: List[AffinityApp]) -> AffinityApp:
        last_error: Optional[ActionError] = None
        for app in apps:
            try:
                await self._run([self.open_command, "-a", app.app_name, file_path])
                return app
            except ActionError as exc:
                logger.warning("Could not open %s with %s: %s", file_path, app.app_name, exc.reason)
                last_error = exc
        assert last_error is not None
        raise last_error


def parse_active_document(output: str) -> ActiveDocumentInfo:
    """Parse the ``name|path`` line printed by the active-document script."""
    if output.strip() in ("", _NO_DOCUMENT):
        return ActiveDocumentInfo(is_open=False)
    name, _, path = output.partition("|")
    return ActiveDocumentInfo(is_open=True, name=name or None, path=path or None)
