from .errors import (
    LoggingConfigurationError,
    LoggingIntegrationError,
    MissingArgumentError,
    ServiceNotRegisteredError,
)
from .registration_state import (
    LoggingRegistration,
    RegistrationState,
    RegistrationStateError,
)

__all__ = [
    "LoggingIntegrationError",
    "LoggingConfigurationError",
    "MissingArgumentError",
    "ServiceNotRegisteredError",
    "LoggingRegistration",
    "RegistrationState",
    "RegistrationStateError",
]
