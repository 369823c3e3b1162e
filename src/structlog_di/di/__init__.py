from .registration import (
    NullEnricher,
    RegisteredLogger,
    use_logger,
    use_logger_configuration,
    use_logger_configuration_with_services,
)
from .services import (
    LOGGER,
    LOGGER_FACTORY,
    LOGGER_PROVIDERS,
    LOGGING_REGISTRATION,
    REGISTERED_LOGGER,
    add_logger_provider,
    add_singleton,
    get_required_service,
    get_services,
)

__all__ = [
    # Registration
    "use_logger",
    "use_logger_configuration",
    "use_logger_configuration_with_services",
    "NullEnricher",
    "RegisteredLogger",
    # Container helpers
    "add_singleton",
    "add_logger_provider",
    "get_required_service",
    "get_services",
    # Service names
    "LOGGER",
    "LOGGER_FACTORY",
    "LOGGER_PROVIDERS",
    "LOGGING_REGISTRATION",
    "REGISTERED_LOGGER",
]
