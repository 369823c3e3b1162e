from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Creates standard library loggers backed by a logging implementation."""

    def create_logger(self, category: str) -> logging.Logger:
        """Return the logger for ``category``; repeated calls return the same one."""
        ...

    def add_provider(self, provider: logging.Handler) -> None:
        """Attach an additional handler that receives forwarded events."""
        ...

    def close(self) -> None:
        """Release whatever the factory owns. Safe to call more than once."""
        ...
