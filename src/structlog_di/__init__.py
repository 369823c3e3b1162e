"""Public API entry point for structlog_di.

Use this module for supported imports. Subpackages are internal.
"""

from .bridge import (
    LoggerFactoryProtocol,
    LoggerProviderCollection,
    StructlogLoggerFactory,
)
from .core import (
    LoggingConfigurationError,
    LoggingIntegrationError,
    LoggingRegistration,
    MissingArgumentError,
    RegistrationState,
    RegistrationStateError,
    ServiceNotRegisteredError,
)
from .di import (
    LOGGER,
    LOGGER_FACTORY,
    LOGGER_PROVIDERS,
    LOGGING_REGISTRATION,
    REGISTERED_LOGGER,
    NullEnricher,
    RegisteredLogger,
    add_logger_provider,
    add_singleton,
    get_required_service,
    get_services,
    use_logger,
    use_logger_configuration,
    use_logger_configuration_with_services,
)
from .pipeline import (
    ConsoleSink,
    InMemorySink,
    LogEvent,
    Logger,
    LoggerConfiguration,
    LoggerProtocol,
    LoggingSection,
    LoggingSettings,
    SilentLogger,
    build_logger,
    close_and_flush,
    configure_logging,
    get_global_logger,
    load_logging_settings,
    set_global_logger,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "use_logger",
    "use_logger_configuration",
    "use_logger_configuration_with_services",
    "NullEnricher",
    "RegisteredLogger",
    "add_singleton",
    "add_logger_provider",
    "get_required_service",
    "get_services",
    "LOGGER",
    "LOGGER_FACTORY",
    "LOGGER_PROVIDERS",
    "LOGGING_REGISTRATION",
    "REGISTERED_LOGGER",
    "LoggerFactoryProtocol",
    "LoggerProviderCollection",
    "StructlogLoggerFactory",
    "LoggerConfiguration",
    "Logger",
    "LoggerProtocol",
    "SilentLogger",
    "LogEvent",
    "ConsoleSink",
    "InMemorySink",
    "LoggingSection",
    "LoggingSettings",
    "load_logging_settings",
    "build_logger",
    "configure_logging",
    "get_global_logger",
    "set_global_logger",
    "close_and_flush",
    "LoggingIntegrationError",
    "LoggingConfigurationError",
    "MissingArgumentError",
    "ServiceNotRegisteredError",
    "LoggingRegistration",
    "RegistrationState",
    "RegistrationStateError",
]
