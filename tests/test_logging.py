import io
import logging

import pytest

from affinity_mcp.core.events import LoggerEventSink, NullEventSink
from affinity_mcp.core.logger import get_logger, parse_level, setup_logging


def test_get_logger_nests_under_the_package_logger() -> None:
    assert get_logger().name == "affinity_mcp"
    assert get_logger("server").name == "affinity_mcp.server"
    assert get_logger("affinity_mcp.core.config").name == "affinity_mcp.core.config"


@pytest.mark.parametrize(
    "value, expected",
    [("debug", logging.DEBUG), (" INFO ", logging.INFO), ("error", logging.ERROR), ("nope", logging.WARNING), (10, 10)],
)
def test_parse_level(value: object, expected: int) -> None:
    assert parse_level(value) == expected  # type: ignore[arg-type]


def test_setup_logging_adds_a_single_stream_handler() -> None:
    root = logging.getLogger("affinity_mcp")
    saved = list(root.handlers)
    stream = io.StringIO()
    try:
        for handler in [h for h in root.handlers if not isinstance(h, logging.NullHandler)]:
            root.removeHandler(handler)

        setup_logging(level=logging.INFO, format_str="%(levelname)s %(message)s", stream=stream)
        setup_logging(level=logging.INFO, stream=io.StringIO())
        get_logger("test").info("hello")

        stream_handlers = [h for h in root.handlers if not isinstance(h, logging.NullHandler)]
        assert len(stream_handlers) == 1
        assert stream.getvalue() == "INFO hello\n"
    finally:
        root.handlers = saved
        root.setLevel(logging.NOTSET)


def test_logger_event_sink_renders_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="affinity_mcp")
    sink = LoggerEventSink(get_logger("events.test"))

    sink.emit("batch.completed", level=logging.INFO, success_count=1, kind="open_file")
    sink.emit("session.initialized")

    messages = [record.getMessage() for record in caplog.records]
    assert "batch.completed success_count=1 kind='open_file'" in messages
    assert "session.initialized" in messages


def test_logger_event_sink_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="affinity_mcp")

    LoggerEventSink(get_logger("events.quiet")).emit("action.started", kind="export")

    assert caplog.records == []


def test_null_event_sink_discards() -> None:
    assert NullEventSink().emit("anything", level=logging.ERROR, value=1) is None
