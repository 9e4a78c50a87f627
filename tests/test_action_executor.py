import os
import tempfile

import pytest
from unittest.mock import AsyncMock, MagicMock

from affinity_mcp.affinity import actions
from affinity_mcp.affinity.models import (
    AffinityApp,
    CreateNewRequest,
    DocumentRequest,
    DrawArtworkRequest,
    ExportFormat,
    ExportRequest,
    OpenFileRequest,
)
from affinity_mcp.core.actions import ActionExecutor, ActionFailed, ActionSucceeded, UnsupportedActions
from affinity_mcp.core.events import NullEventSink
from affinity_mcp.core.exceptions import ActionUnsupportedError

from conftest import FakeCapability


@pytest.mark.asyncio
async def test_open_infers_the_app_from_the_extension() -> None:
    capability = FakeCapability()
    executor = ActionExecutor(capability, events=NullEventSink())

    outcome = await executor.run(actions.OPEN_FILE, OpenFileRequest(path="/art/logo.AFDESIGN"))

    assert isinstance(outcome, ActionSucceeded)
    assert outcome.payload() == {"opened": True, "app": "Affinity Designer", "path": "/art/logo.AFDESIGN"}
    assert len(capability.calls) == 1
    kind, request = capability.calls[0]
    assert kind == "open_file"
    assert request.app is AffinityApp.DESIGNER


@pytest.mark.asyncio
async def test_explicit_app_wins_over_the_extension() -> None:
    capability = FakeCapability()
    executor = ActionExecutor(capability, events=NullEventSink())

    outcome = await executor.run(actions.OPEN_FILE, OpenFileRequest(path="a.afdesign", app=AffinityApp.PUBLISHER))

    assert outcome.result.app == "Affinity Publisher"


@pytest.mark.asyncio
async def test_create_and_export_fill_defaults() -> None:
    capability = FakeCapability()
    executor = ActionExecutor(capability, events=NullEventSink())

    await executor.run(actions.CREATE_NEW, CreateNewRequest(app=AffinityApp.PHOTO))
    await executor.run(actions.EXPORT, ExportRequest(path="/tmp/out.jpg", format=ExportFormat.JPG))

    create_request = capability.calls[0][1]
    export_request = capability.calls[1][1]
    assert (create_request.width, create_request.height) == (1920, 1080)
    assert export_request.quality == 90


@pytest.mark.asyncio
async def test_draw_artwork_defaults_to_a_temp_file() -> None:
    capability = FakeCapability()
    executor = ActionExecutor(capability, events=NullEventSink())

    outcome = await executor.run(actions.DRAW_ARTWORK, DrawArtworkRequest())

    request = capability.calls[0][1]
    assert request.output_path == os.path.join(tempfile.gettempdir(), "pikachu.svg")
    assert (request.width, request.height) == (800, 800)
    assert outcome.payload()["file_path"] == request.output_path


@pytest.mark.asyncio
async def test_action_failure_becomes_a_failed_outcome() -> None:
    events = MagicMock()
    executor = ActionExecutor(FakeCapability(failing={"/tmp/out.png"}), events=events)

    outcome = await executor.run(actions.EXPORT, ExportRequest(path="/tmp/out.png", format=ExportFormat.PNG))

    assert isinstance(outcome, ActionFailed)
    assert outcome.succeeded is False
    assert outcome.reason == "cannot reach /tmp/out.png"
    assert outcome.payload() == {"exported": False, "path": "/tmp/out.png"}
    emitted = [call.args[0] for call in events.emit.call_args_list]
    assert "action.failed" in emitted


@pytest.mark.asyncio
async def test_unsupported_capability_reports_unsupported_app() -> None:
    executor = ActionExecutor(UnsupportedActions(), events=NullEventSink())

    opened = await executor.run(actions.OPEN_FILE, OpenFileRequest(path="photo.afphoto"))
    created = await executor.run(actions.CREATE_NEW, CreateNewRequest(app=AffinityApp.DESIGNER))
    active = await executor.run(actions.GET_ACTIVE_DOCUMENT, DocumentRequest())

    assert opened.payload() == {"opened": False, "app": "Unsupported", "path": "photo.afphoto"}
    assert created.payload() == {"created": False, "app": "Unsupported"}
    assert active.payload() == {"is_open": False, "name": None, "path": None}


@pytest.mark.asyncio
async def test_unsupported_capability_raises_for_every_kind() -> None:
    capability = UnsupportedActions(reason="not on this OS")

    assert capability.available is False
    with pytest.raises(ActionUnsupportedError, match="close_document: not on this OS"):
        await capability.perform("close_document", DocumentRequest())


@pytest.mark.asyncio
async def test_non_action_errors_propagate() -> None:
    capability = MagicMock()
    capability.name = "broken"
    capability.perform = AsyncMock(side_effect=KeyError("boom"))
    executor = ActionExecutor(capability, events=NullEventSink())

    with pytest.raises(KeyError):
        await executor.run(actions.CLOSE_DOCUMENT, DocumentRequest())


@pytest.mark.asyncio
async def test_capability_is_invoked_exactly_once() -> None:
    capability = FakeCapability(failing={"x"})
    executor = ActionExecutor(capability, events=NullEventSink())

    await executor.run(actions.OPEN_FILE, OpenFileRequest(path="x"))

    assert len(capability.calls) == 1
