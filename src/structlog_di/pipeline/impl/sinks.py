from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from threading import Lock
from typing import Any, TextIO

import structlog

from ...core.errors import LoggingConfigurationError
from ..events import LogEvent

CONSOLE_FORMATS = ("json", "console")
_RENDERED_KEYS = frozenset({"timestamp", "level", "event", "exc_info", "exception"})


class InMemorySink:
    """Keeps every emitted event in memory; intended for tests."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: list[LogEvent] = []
        self._closed = False

    @property
    def events(self) -> list[LogEvent]:
        with self._lock:
            return list(self._events)

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, event: LogEvent) -> None:
        with self._lock:
            self._events.append(event)

    def messages(self, level: str | None = None) -> list[str]:
        return [
            event.message
            for event in self.events
            if level is None or event.level == level
        ]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def close(self) -> None:
        self._closed = True


class ConsoleSink:
    """Writes one rendered line per event using a structlog renderer."""

    def __init__(
        self, *, format: str = "json", stream: TextIO | None = None
    ) -> None:
        if format not in CONSOLE_FORMATS:
            raise LoggingConfigurationError(
                f"Invalid console format: {format!r}; "
                f"expected one of {', '.join(CONSOLE_FORMATS)}"
            )
        self._format = format
        self._stream = stream
        self._lock = Lock()
        if format == "json":
            self._renderer: Any = structlog.processors.JSONRenderer(default=str)
        else:
            self._renderer = structlog.dev.ConsoleRenderer(colors=False)

    def emit(self, event: LogEvent) -> None:
        event_dict: dict[str, Any] = {
            "timestamp": event.timestamp,
            "level": event.level,
            "event": event.message,
        }
        for key, value in event.properties.items():
            # Clashing properties get a leading underscore.
            event_dict["_" + key if key in _RENDERED_KEYS else key] = value
        if event.exc_info is not None:
            event_dict["exc_info"] = event.exc_info
            if self._format == "json":
                event_dict = structlog.processors.format_exc_info(
                    None, event.level, event_dict
                )
        line = self._renderer(None, event.level, event_dict)
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(f"{line}\n")

    def close(self) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            stream.flush()


class ProvidersSink:
    """
    Forwards events to standard library handlers.

    Each event becomes a ``logging.LogRecord`` named after its source
    context, carrying the rendered message and the event properties as
    record attributes.
    """

    def __init__(self, providers: Iterable[logging.Handler]) -> None:
        self._providers = providers

    def emit(self, event: LogEvent) -> None:
        record = to_log_record(event)
        for handler in self._providers:
            if record.levelno >= handler.level:
                handler.handle(record)

    def close(self) -> None:
        return None


def to_log_record(event: LogEvent) -> logging.LogRecord:
    record = logging.LogRecord(
        name=event.source_context or "",
        level=event.levelno,
        pathname="",
        lineno=0,
        msg=event.message,
        args=None,
        exc_info=event.exc_info,
    )
    for key, value in event.properties.items():
        if key not in record.__dict__:
            setattr(record, key, value)
    return record
