from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from threading import Lock
from types import TracebackType
from typing import Any, override

import structlog

from ..events import SOURCE_CONTEXT, ExcInfo, LogEvent, normalize_level
from ..protocol import (
    LogEventEnricherProtocol,
    LogEventSinkProtocol,
    LoggerProtocol,
)
from .processors import (
    EXC_INFO_KEY,
    LEVEL_KEY,
    MESSAGE_KEY,
    PROPERTIES_KEY,
    TEMPLATE_KEY,
    TIMESTAMP_KEY,
    LevelGate,
    add_level,
    capture_exc_info,
    render_message,
    unpack_properties,
)

_LOGGER = logging.getLogger(__name__)

LogEventFilter = Callable[[LogEvent], bool]


class Pipeline:
    """
    Shared state behind every handle derived from one configuration.

    The pipeline is the final "logger" of the structlog processor chain:
    processed event dicts arrive as keyword arguments of the level method
    and are fanned out to the sinks.
    """

    def __init__(
        self,
        *,
        sinks: Sequence[LogEventSinkProtocol],
        gate: LevelGate,
        enrichers: Sequence[LogEventEnricherProtocol] = (),
        filters: Sequence[LogEventFilter] = (),
        from_log_context: bool = True,
    ) -> None:
        self._sinks = tuple(sinks)
        self._gate = gate
        self._enrichers = tuple(enrichers)
        self._filters = tuple(filters)
        self._lock = Lock()
        self._closed = False

        head: list[Any] = [unpack_properties]
        if from_log_context:
            head.append(structlog.contextvars.merge_contextvars)
        head.extend(
            [
                add_level,
                gate,
                structlog.processors.TimeStamper(
                    fmt="iso", utc=True, key=TIMESTAMP_KEY
                ),
            ]
        )
        self._head = tuple(head)
        self._tail = (capture_exc_info, render_message)

    @property
    def closed(self) -> bool:
        return self._closed

    def processors(
        self, enrichers: Iterable[LogEventEnricherProtocol] = ()
    ) -> list[Any]:
        return [*self._head, *self._enrichers, *enrichers, *self._tail]

    def is_enabled(self, level: str, source_context: str | None = None) -> bool:
        return not self._closed and self._gate.is_enabled(level, source_context)

    def msg(self, /, **event_dict: Any) -> None:
        if self._closed:
            return
        event = LogEvent(
            timestamp=str(event_dict.pop(TIMESTAMP_KEY, "")),
            level=str(event_dict.pop(LEVEL_KEY)),
            message_template=str(event_dict.pop(TEMPLATE_KEY, "")),
            message=str(event_dict.pop(MESSAGE_KEY, "")),
            exc_info=event_dict.pop(EXC_INFO_KEY, None),
            properties=event_dict,
        )
        for event_filter in self._filters:
            if not event_filter(event):
                return
        for sink in self._sinks:
            try:
                sink.emit(event)
            except Exception:
                _LOGGER.exception("Log event sink %r failed", sink)

    debug = info = warning = error = critical = msg

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for sink in self._sinks:
            try:
                sink.close()
            except Exception:
                _LOGGER.exception("Failed to close log event sink %r", sink)


class _EventLogger(structlog.BoundLoggerBase):
    def emit(
        self,
        level: str,
        template: str,
        properties: dict[str, Any],
        exc_info: ExcInfo,
    ) -> Any:
        return self._proxy_to_logger(
            level,
            None,
            **{
                TEMPLATE_KEY: template,
                PROPERTIES_KEY: properties,
                EXC_INFO_KEY: exc_info,
            },
        )


class Logger(LoggerProtocol):
    """
    Handle onto a structured logging pipeline.

    Only the handle created by ``LoggerConfiguration.create_logger()`` owns
    the pipeline. Handles derived with :meth:`for_context` share it and
    their :meth:`close` does nothing.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        *,
        enrichers: Iterable[LogEventEnricherProtocol] = (),
        context: dict[str, Any] | None = None,
        owns_pipeline: bool = False,
    ) -> None:
        self._pipeline = pipeline
        self._enrichers = tuple(enrichers)
        self._context = dict(context or {})
        self._owns_pipeline = owns_pipeline
        self._bound: _EventLogger = structlog.wrap_logger(
            pipeline,
            processors=pipeline.processors(self._enrichers),
            wrapper_class=_EventLogger,
            context_class=dict,
        ).bind()

    @property
    def closed(self) -> bool:
        return self._pipeline.closed

    @property
    def owns_pipeline(self) -> bool:
        return self._owns_pipeline

    @override
    def is_enabled(self, level: str) -> bool:
        source = self._context.get(SOURCE_CONTEXT)
        return self._pipeline.is_enabled(
            normalize_level(level), None if source is None else str(source)
        )

    @override
    def write(
        self,
        level: str,
        template: str,
        /,
        *,
        exc_info: ExcInfo = None,
        **properties: Any,
    ) -> None:
        if self._pipeline.closed:
            return
        self._bound.emit(
            normalize_level(level),
            template,
            {**self._context, **properties},
            exc_info,
        )

    def debug(self, template: str, /, **properties: Any) -> None:
        self.write("debug", template, **properties)

    def info(self, template: str, /, **properties: Any) -> None:
        self.write("info", template, **properties)

    def warning(self, template: str, /, **properties: Any) -> None:
        self.write("warning", template, **properties)

    def error(self, template: str, /, **properties: Any) -> None:
        self.write("error", template, **properties)

    def critical(self, template: str, /, **properties: Any) -> None:
        self.write("critical", template, **properties)

    def exception(self, template: str, /, **properties: Any) -> None:
        properties.setdefault("exc_info", True)
        self.write("error", template, **properties)

    @override
    def for_context(
        self, /, *enrichers: LogEventEnricherProtocol, **properties: Any
    ) -> "Logger":
        return Logger(
            self._pipeline,
            enrichers=self._enrichers + enrichers,
            context={**self._context, **properties},
            owns_pipeline=False,
        )

    @override
    def close(self) -> None:
        if self._owns_pipeline:
            self._pipeline.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class SilentLogger(LoggerProtocol):
    """Logger that discards every event."""

    @property
    def closed(self) -> bool:
        return False

    @override
    def is_enabled(self, level: str) -> bool:
        return False

    @override
    def write(
        self,
        level: str,
        template: str,
        /,
        *,
        exc_info: ExcInfo = None,
        **properties: Any,
    ) -> None:
        return None

    def debug(self, template: str, /, **properties: Any) -> None:
        return None

    def info(self, template: str, /, **properties: Any) -> None:
        return None

    def warning(self, template: str, /, **properties: Any) -> None:
        return None

    def error(self, template: str, /, **properties: Any) -> None:
        return None

    def critical(self, template: str, /, **properties: Any) -> None:
        return None

    def exception(self, template: str, /, **properties: Any) -> None:
        return None

    @override
    def for_context(
        self, /, *enrichers: LogEventEnricherProtocol, **properties: Any
    ) -> "SilentLogger":
        return self

    @override
    def close(self) -> None:
        return None
