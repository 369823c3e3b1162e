import pytest

from structlog_di.core import (
    LoggingRegistration,
    RegistrationState,
    RegistrationStateError,
)


def test_registration_walks_states_in_order() -> None:
    registration = LoggingRegistration()
    assert registration.state is RegistrationState.UNCONFIGURED

    registration.registered()
    registration.built()
    registration.disposed()

    assert registration.state is RegistrationState.DISPOSED


def test_build_before_registration_raises() -> None:
    registration = LoggingRegistration()

    with pytest.raises(RegistrationStateError) as excinfo:
        registration.built()

    assert excinfo.value.state is RegistrationState.UNCONFIGURED
    assert excinfo.value.allowed == (RegistrationState.REGISTERED,)
    assert registration.state is RegistrationState.UNCONFIGURED


def test_transitions_never_go_backwards() -> None:
    registration = LoggingRegistration()
    registration.registered()
    registration.built()

    with pytest.raises(RegistrationStateError):
        registration.built()
    with pytest.raises(RegistrationStateError):
        registration.registered()

    registration.disposed()
    with pytest.raises(RegistrationStateError):
        registration.disposed()


def test_require_reports_expected_state() -> None:
    registration = LoggingRegistration()
    registration.registered()

    registration.require(RegistrationState.REGISTERED)
    with pytest.raises(RegistrationStateError, match="Built"):
        registration.require(RegistrationState.BUILT)
