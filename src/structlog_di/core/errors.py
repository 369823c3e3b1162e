from __future__ import annotations


class LoggingIntegrationError(Exception):
    """Base exception for structlog-di errors."""


class MissingArgumentError(LoggingIntegrationError, ValueError):
    """Raised when a required argument was omitted or passed as ``None``."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"argument must not be None: {argument}")
        self.argument = argument


class ServiceNotRegisteredError(LoggingIntegrationError, LookupError):
    """Raised when a required service has no provider in the container."""

    def __init__(self, service: str) -> None:
        super().__init__(f"no service registered under {service!r}")
        self.service = service


class LoggingConfigurationError(LoggingIntegrationError, ValueError):
    """Raised when a logger configuration or its settings are invalid."""
