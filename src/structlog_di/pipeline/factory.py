from __future__ import annotations

from .configuration import LoggerConfiguration
from .global_logger import set_global_logger
from .impl.logger import Logger
from .settings import LoggingSettings, load_logging_settings


def build_logger(settings: LoggingSettings | None = None) -> Logger:
    resolved = settings or load_logging_settings()
    return LoggerConfiguration().read_from.settings(resolved).create_logger()


def configure_logging(settings: LoggingSettings | None = None) -> Logger:
    """Build a logger from settings and install it as the global logger."""
    logger = build_logger(settings)
    set_global_logger(logger)
    return logger
