from __future__ import annotations

import threading
from enum import Enum

from .errors import LoggingIntegrationError


class RegistrationState(str, Enum):
    """Lifecycle of the logging services registered in one container."""

    UNCONFIGURED = "Unconfigured"
    REGISTERED = "Registered"
    BUILT = "Built"
    DISPOSED = "Disposed"


class RegistrationStateError(LoggingIntegrationError):
    """Raised when a registration transition is invalid for the current state."""

    def __init__(
        self,
        *,
        to_state: RegistrationState,
        state: RegistrationState,
        allowed: tuple[RegistrationState, ...],
    ) -> None:
        allowed_str = ", ".join(s.value for s in allowed) if allowed else "<none>"
        super().__init__(
            f"invalid transition to {to_state.value} from state={state.value}; "
            f"allowed={allowed_str}"
        )
        self.to_state = to_state
        self.state = state
        self.allowed = allowed


_ALLOWED_FROM: dict[RegistrationState, tuple[RegistrationState, ...]] = {
    RegistrationState.REGISTERED: (RegistrationState.UNCONFIGURED,),
    RegistrationState.BUILT: (RegistrationState.REGISTERED,),
    RegistrationState.DISPOSED: (RegistrationState.BUILT,),
}


class LoggingRegistration:
    """
    Tracks one container's logging registration.

    Transitions are one-directional:
    ``Unconfigured -> Registered -> Built -> Disposed``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = RegistrationState.UNCONFIGURED

    @property
    def state(self) -> RegistrationState:
        return self._state

    def registered(self) -> None:
        self._transition(RegistrationState.REGISTERED)

    def built(self) -> None:
        self._transition(RegistrationState.BUILT)

    def disposed(self) -> None:
        self._transition(RegistrationState.DISPOSED)

    def require(self, state: RegistrationState) -> None:
        """Raise unless the registration is currently in ``state``."""
        if self._state is not state:
            raise RegistrationStateError(
                to_state=state,
                state=self._state,
                allowed=(state,),
            )

    def _transition(self, to_state: RegistrationState) -> None:
        allowed = _ALLOWED_FROM[to_state]
        with self._lock:
            if self._state not in allowed:
                raise RegistrationStateError(
                    to_state=to_state,
                    state=self._state,
                    allowed=allowed,
                )
            self._state = to_state
