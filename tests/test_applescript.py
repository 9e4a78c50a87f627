import logging

import pytest
from pathlib import Path
from typing import List, Tuple
from unittest.mock import AsyncMock, MagicMock, patch

from affinity_mcp.affinity.applescript import AppleScriptActions, parse_active_document, quote
from affinity_mcp.affinity.capability import build_capability
from affinity_mcp.affinity.models import (
    AffinityApp,
    CreateNewRequest,
    DocumentRequest,
    DrawArtworkRequest,
    ExportFormat,
    ExportRequest,
    OpenFileRequest,
)
from affinity_mcp.core.actions import UnsupportedActions
from affinity_mcp.core.config import Settings
from affinity_mcp.core.exceptions import ActionError

SUBPROCESS = "affinity_mcp.affinity.applescript.asyncio.create_subprocess_exec"


def _process(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


def test_quote_escapes_quotes_and_backslashes() -> None:
    assert quote('say "hi"') == '"say \\"hi\\""'
    assert quote("C:\\dir") == '"C:\\\\dir"'


@pytest.mark.parametrize(
    "output, expected",
    [
        ("||", (False, None, None)),
        ("", (False, None, None)),
        ("poster.afdesign|Macintosh HD:Users:me:poster.afdesign", (True, "poster.afdesign", "Macintosh HD:Users:me:poster.afdesign")),
        ("Untitled|", (True, "Untitled", None)),
    ],
)
def test_parse_active_document(output: str, expected: Tuple[bool, object, object]) -> None:
    info = parse_active_document(output)
    assert (info.is_open, info.name, info.path) == expected


@pytest.mark.asyncio
async def test_open_file_runs_one_script_with_the_absolute_path(tmp_path: Path) -> None:
    target = tmp_path / "logo.afdesign"
    target.write_text("x")
    process = _process()

    with patch(SUBPROCESS, AsyncMock(return_value=process)) as spawn:
        result = await AppleScriptActions(osascript="/usr/bin/osascript").perform(
            "open_file", OpenFileRequest(path=str(target), app=AffinityApp.DESIGNER)
        )

    assert result.model_dump() == {"opened": True, "app": "Affinity Designer", "path": str(target)}
    spawn.assert_awaited_once()
    argv = spawn.await_args.args
    assert argv[0] == "/usr/bin/osascript"
    assert argv[1] == "-e"
    assert 'tell application "Affinity Designer"' in argv[2]
    assert f'open POSIX file "{target.resolve()}"' in argv[2]


@pytest.mark.asyncio
async def test_open_missing_file_fails_without_running_a_script(tmp_path: Path) -> None:
    with patch(SUBPROCESS, AsyncMock()) as spawn:
        with pytest.raises(ActionError, match="Cannot resolve path"):
            await AppleScriptActions().perform(
                "open_file", OpenFileRequest(path=str(tmp_path / "missing.afphoto"), app=AffinityApp.PHOTO)
            )
    spawn.assert_not_called()


@pytest.mark.asyncio
async def test_non_zero_exit_carries_stderr() -> None:
    process = _process(returncode=1, stderr=b"execution error: No document is open (-2700)\n")

    with patch(SUBPROCESS, AsyncMock(return_value=process)):
        with pytest.raises(ActionError, match="No document is open"):
            await AppleScriptActions().perform(
                "export", ExportRequest(path="/tmp/out.png", format=ExportFormat.PNG, quality=80)
            )


@pytest.mark.asyncio
async def test_missing_osascript_is_an_action_error() -> None:
    with patch(SUBPROCESS, AsyncMock(side_effect=FileNotFoundError("osascript"))):
        with pytest.raises(ActionError, match="Failed to start"):
            await AppleScriptActions().perform("close_document", DocumentRequest())


@pytest.mark.asyncio
async def test_create_new_embeds_the_size() -> None:
    process = _process()

    with patch(SUBPROCESS, AsyncMock(return_value=process)) as spawn:
        result = await AppleScriptActions().perform(
            "create_new", CreateNewRequest(app=AffinityApp.PUBLISHER, width=640, height=480)
        )

    assert result.model_dump() == {"created": True, "app": "Affinity Publisher"}
    assert "{width:640, height:480}" in spawn.await_args.args[2]


@pytest.mark.asyncio
async def test_get_active_document_parses_the_script_output() -> None:
    process = _process(stdout=b"poster|/Users/me/poster.afphoto\n")

    with patch(SUBPROCESS, AsyncMock(return_value=process)):
        result = await AppleScriptActions().perform("get_active_document", DocumentRequest())

    assert result.model_dump() == {"is_open": True, "name": "poster", "path": "/Users/me/poster.afphoto"}


@pytest.mark.asyncio
async def test_draw_artwork_writes_svg_and_falls_back_to_designer(tmp_path: Path) -> None:
    output = tmp_path / "pika.svg"
    calls: List[Tuple[str, ...]] = []

    async def spawn(*argv: str, **kwargs: object) -> MagicMock:
        calls.append(argv)
        if "Affinity Photo" in argv:
            return _process(returncode=1, stderr=b"Unable to find application named 'Affinity Photo'")
        return _process()

    with patch(SUBPROCESS, spawn):
        result = await AppleScriptActions().perform(
            "draw_artwork", DrawArtworkRequest(output_path=str(output), width=400, height=300)
        )

    assert result.model_dump() == {"created": True, "file_path": str(output), "app": "Affinity Designer"}
    svg = output.read_text(encoding="utf-8")
    assert svg.startswith("<?xml")
    assert 'viewBox="0 0 400 300"' in svg
    assert [call[:3] for call in calls] == [("open", "-a", "Affinity Photo"), ("open", "-a", "Affinity Designer")]


@pytest.mark.asyncio
async def test_unknown_kind_is_a_programming_error() -> None:
    with pytest.raises(ValueError, match="Unknown action kind"):
        await AppleScriptActions().perform("rotate", DocumentRequest())


@pytest.mark.parametrize(
    "actions, platform, expected",
    [
        ("auto", "darwin", AppleScriptActions),
        ("auto", "linux", UnsupportedActions),
        ("auto", "win32", UnsupportedActions),
        ("applescript", "linux", AppleScriptActions),
        ("unsupported", "darwin", UnsupportedActions),
    ],
)
def test_build_capability(actions: str, platform: str, expected: type) -> None:
    capability = build_capability(Settings(actions=actions, osascript="/opt/osascript"), platform=platform)

    assert isinstance(capability, expected)
    if isinstance(capability, AppleScriptActions):
        assert capability.osascript == "/opt/osascript"


def test_build_capability_warns_when_actions_cannot_run(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="affinity_mcp")

    build_capability(Settings(actions="auto"), platform="darwin")
    assert caplog.records == []

    capability = build_capability(Settings(actions="auto"), platform="linux")
    assert capability.available is False
    assert any("unavailable" in record.getMessage() for record in caplog.records)
