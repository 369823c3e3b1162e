import io
import json
import logging

import pytest

from structlog_di import ConsoleSink, LogEvent, LoggingConfigurationError
from structlog_di.pipeline import ProvidersSink


class _RecordingHandler(logging.Handler):
    def __init__(self, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _event(**overrides) -> LogEvent:
    values = {
        "timestamp": "2026-01-01T00:00:00Z",
        "level": "info",
        "message_template": "Hello {name}",
        "message": "Hello world",
        "properties": {"name": "world", "source_context": "app.greeter"},
    }
    values.update(overrides)
    return LogEvent(**values)


def test_console_sink_writes_json_lines() -> None:
    stream = io.StringIO()
    sink = ConsoleSink(stream=stream)

    sink.emit(_event())

    payload = json.loads(stream.getvalue())
    assert payload["event"] == "Hello world"
    assert payload["level"] == "info"
    assert payload["name"] == "world"
    assert payload["source_context"] == "app.greeter"
    assert payload["timestamp"] == "2026-01-01T00:00:00Z"


def test_console_sink_formats_exceptions_in_json() -> None:
    stream = io.StringIO()
    sink = ConsoleSink(stream=stream)
    try:
        raise ValueError("boom")
    except ValueError as exc:
        error = exc

    sink.emit(_event(level="error", exc_info=(ValueError, error, error.__traceback__)))

    payload = json.loads(stream.getvalue())
    assert "ValueError: boom" in payload["exception"]


def test_console_sink_console_format_is_human_readable() -> None:
    stream = io.StringIO()
    sink = ConsoleSink(format="console", stream=stream)

    sink.emit(_event())

    line = stream.getvalue()
    assert "Hello world" in line
    assert "info" in line


def test_console_sink_rejects_unknown_format() -> None:
    with pytest.raises(LoggingConfigurationError):
        ConsoleSink(format="xml")


def test_providers_sink_builds_records_for_each_handler() -> None:
    first = _RecordingHandler()
    second = _RecordingHandler(level=logging.ERROR)
    sink = ProvidersSink([first, second])

    sink.emit(_event())

    (record,) = first.records
    assert record.name == "app.greeter"
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Hello world"
    assert getattr(record, "source_context") == "app.greeter"
    assert second.records == []


def test_providers_sink_reads_providers_lazily() -> None:
    handlers: list[logging.Handler] = []
    sink = ProvidersSink(handlers)
    handler = _RecordingHandler()

    sink.emit(_event())
    handlers.append(handler)
    sink.emit(_event(message="Hello again"))

    assert [record.getMessage() for record in handler.records] == ["Hello again"]


def test_console_sink_moves_clashing_properties_aside() -> None:
    stream = io.StringIO()
    sink = ConsoleSink(stream=stream)

    sink.emit(_event(properties={"event": "signup", "level": "gold"}))

    payload = json.loads(stream.getvalue())
    assert payload["event"] == "Hello world"
    assert payload["level"] == "info"
    assert payload["_event"] == "signup"
    assert payload["_level"] == "gold"
