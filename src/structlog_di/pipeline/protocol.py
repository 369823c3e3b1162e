from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable

from .events import ExcInfo, LogEvent

EventDict = MutableMapping[str, Any]


@runtime_checkable
class LogEventEnricherProtocol(Protocol):
    """
    Adds properties to an event before it reaches the sinks.

    Enrichers are structlog processors: they receive the wrapped logger,
    the level method name and the event dict, and return the event dict.
    """

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict: ...


@runtime_checkable
class LogEventSinkProtocol(Protocol):
    """Destination that receives rendered log events."""

    def emit(self, event: LogEvent) -> None: ...

    def close(self) -> None:
        """Flush and release the sink. Called once by the owning pipeline."""
        ...


@runtime_checkable
class LoggerProtocol(Protocol):
    """Capability set of a logger handle."""

    @property
    def closed(self) -> bool: ...

    def is_enabled(self, level: str) -> bool: ...

    def write(
        self,
        level: str,
        template: str,
        /,
        *,
        exc_info: ExcInfo = None,
        **properties: Any,
    ) -> None: ...

    def for_context(
        self, /, *enrichers: LogEventEnricherProtocol, **properties: Any
    ) -> "LoggerProtocol": ...

    def close(self) -> None: ...
