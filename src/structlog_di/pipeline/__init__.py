"""Structured logging pipeline built on structlog processors and renderers."""

from .configuration import LoggerConfiguration
from .events import (
    LEVELS,
    SOURCE_CONTEXT,
    ExcInfo,
    LogEvent,
    normalize_level,
    render_template,
    template_holes,
)
from .factory import build_logger, configure_logging
from .global_logger import close_and_flush, get_global_logger, set_global_logger
from .impl.logger import Logger, SilentLogger
from .impl.sinks import ConsoleSink, InMemorySink, ProvidersSink
from .protocol import (
    LogEventEnricherProtocol,
    LogEventSinkProtocol,
    LoggerProtocol,
)
from .section import ConsoleSection, LoggingSection
from .settings import LoggingSettings, load_logging_settings

__all__ = [
    "LEVELS",
    "SOURCE_CONTEXT",
    "ExcInfo",
    "LogEvent",
    "normalize_level",
    "render_template",
    "template_holes",
    "LoggerConfiguration",
    "Logger",
    "SilentLogger",
    "ConsoleSink",
    "InMemorySink",
    "ProvidersSink",
    "LogEventEnricherProtocol",
    "LogEventSinkProtocol",
    "LoggerProtocol",
    "ConsoleSection",
    "LoggingSection",
    "LoggingSettings",
    "load_logging_settings",
    "build_logger",
    "configure_logging",
    "get_global_logger",
    "set_global_logger",
    "close_and_flush",
]
