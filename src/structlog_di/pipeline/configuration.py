from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TextIO

from pydantic import ValidationError

from ..core.errors import LoggingConfigurationError, MissingArgumentError
from .events import LogEvent, normalize_level
from .impl.logger import Logger, Pipeline
from .impl.processors import LevelGate, PropertyEnricher
from .impl.sinks import ConsoleSink, InMemorySink, ProvidersSink
from .protocol import LogEventEnricherProtocol, LogEventSinkProtocol
from .section import LoggingSection
from .settings import LoggingSettings


class LoggerConfiguration:
    """
    Builder for a structured logging pipeline.

    Configuration methods return the builder so calls can be chained::

        logger = (
            LoggerConfiguration()
            .minimum_level("debug")
            .enrich.with_property("application", "billing")
            .write_to.console(format="console")
            .create_logger()
        )

    :meth:`create_logger` may be called only once per builder.
    """

    def __init__(self) -> None:
        self._minimum_level = "info"
        self._overrides: dict[str, str] = {}
        self._enrichers: list[LogEventEnricherProtocol] = []
        self._filters: list[Callable[[LogEvent], bool]] = []
        self._sinks: list[LogEventSinkProtocol] = []
        self._from_log_context = True
        self._created = False
        self.enrich = EnrichmentConfiguration(self)
        self.filter = FilterConfiguration(self)
        self.write_to = SinkConfiguration(self)
        self.read_from = SettingsConfiguration(self)

    def minimum_level(self, level: str | int) -> "LoggerConfiguration":
        self._minimum_level = normalize_level(level)
        return self

    def override_level(
        self, source_prefix: str, level: str | int
    ) -> "LoggerConfiguration":
        """Use ``level`` for events whose source context starts with the prefix."""
        if not source_prefix:
            raise MissingArgumentError("source_prefix")
        self._overrides[source_prefix] = normalize_level(level)
        return self

    def create_logger(self) -> Logger:
        if self._created:
            raise LoggingConfigurationError(
                "create_logger() was already called on this configuration"
            )
        self._created = True
        pipeline = Pipeline(
            sinks=self._sinks,
            gate=LevelGate(self._minimum_level, self._overrides),
            enrichers=self._enrichers,
            filters=self._filters,
            from_log_context=self._from_log_context,
        )
        return Logger(pipeline, owns_pipeline=True)


class EnrichmentConfiguration:
    def __init__(self, configuration: LoggerConfiguration) -> None:
        self._configuration = configuration

    def with_(
        self, *enrichers: LogEventEnricherProtocol
    ) -> LoggerConfiguration:
        for enricher in enrichers:
            if enricher is None:
                raise MissingArgumentError("enricher")
            self._configuration._enrichers.append(enricher)
        return self._configuration

    def with_property(self, name: str, value: Any) -> LoggerConfiguration:
        return self.with_(PropertyEnricher(name, value))

    def from_log_context(self, enabled: bool = True) -> LoggerConfiguration:
        """Merge properties bound with ``structlog.contextvars`` into events."""
        self._configuration._from_log_context = enabled
        return self._configuration


class FilterConfiguration:
    def __init__(self, configuration: LoggerConfiguration) -> None:
        self._configuration = configuration

    def by_excluding(
        self, predicate: Callable[[LogEvent], bool]
    ) -> LoggerConfiguration:
        if predicate is None:
            raise MissingArgumentError("predicate")
        self._configuration._filters.append(lambda event: not predicate(event))
        return self._configuration

    def by_including_only(
        self, predicate: Callable[[LogEvent], bool]
    ) -> LoggerConfiguration:
        if predicate is None:
            raise MissingArgumentError("predicate")
        self._configuration._filters.append(predicate)
        return self._configuration


class SinkConfiguration:
    def __init__(self, configuration: LoggerConfiguration) -> None:
        self._configuration = configuration

    def sink(self, sink: LogEventSinkProtocol) -> LoggerConfiguration:
        if sink is None:
            raise MissingArgumentError("sink")
        self._configuration._sinks.append(sink)
        return self._configuration

    def console(
        self, *, format: str = "json", stream: TextIO | None = None
    ) -> LoggerConfiguration:
        return self.sink(ConsoleSink(format=format, stream=stream))

    def in_memory(self, sink: InMemorySink | None = None) -> LoggerConfiguration:
        return self.sink(sink if sink is not None else InMemorySink())

    def providers(
        self, providers: Iterable[logging.Handler]
    ) -> LoggerConfiguration:
        """Write events to standard library handlers, e.g. a provider collection."""
        if providers is None:
            raise MissingArgumentError("providers")
        return self.sink(ProvidersSink(providers))


class SettingsConfiguration:
    def __init__(self, configuration: LoggerConfiguration) -> None:
        self._configuration = configuration

    def settings(self, settings: LoggingSettings) -> LoggerConfiguration:
        if settings is None:
            raise MissingArgumentError("settings")
        configuration = self._configuration.minimum_level(settings.level)
        configuration.enrich.from_log_context(settings.from_log_context)
        if settings.application:
            configuration.enrich.with_property("application", settings.application)
        if settings.console_enabled:
            configuration.write_to.console(format=settings.console_format)
        return configuration

    def mapping(self, section: Mapping[str, Any]) -> LoggerConfiguration:
        """Apply a logging section of an application configuration mapping."""
        if section is None:
            raise MissingArgumentError("section")
        try:
            parsed = LoggingSection.model_validate(dict(section))
        except ValidationError as exc:
            raise LoggingConfigurationError(
                f"Invalid logging configuration: {exc}"
            ) from exc

        configuration = self._configuration.minimum_level(parsed.minimum_level)
        for prefix, level in parsed.overrides.items():
            configuration.override_level(prefix, level)
        for name, value in parsed.properties.items():
            configuration.enrich.with_property(name, value)
        configuration.enrich.from_log_context(parsed.from_log_context)
        if parsed.console is not None and parsed.console.enabled:
            configuration.write_to.console(format=parsed.console.format)
        return configuration
