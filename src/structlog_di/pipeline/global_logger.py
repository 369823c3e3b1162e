"""
Process-wide "current logger" slot.

Code that cannot receive a logger through the container reads the slot
with :func:`get_global_logger`. The slot starts out holding a
:class:`SilentLogger`; :func:`set_global_logger` installs a configured
handle and :func:`close_and_flush` closes it and resets the slot to a
silent logger. These three functions are the only accessors.
"""

from __future__ import annotations

from threading import Lock

from ..core.errors import MissingArgumentError
from .impl.logger import SilentLogger
from .protocol import LoggerProtocol

_LOCK = Lock()
_GLOBAL_LOGGER: LoggerProtocol = SilentLogger()


def get_global_logger() -> LoggerProtocol:
    return _GLOBAL_LOGGER


def set_global_logger(logger: LoggerProtocol) -> None:
    global _GLOBAL_LOGGER
    if logger is None:
        raise MissingArgumentError("logger")
    with _LOCK:
        _GLOBAL_LOGGER = logger


def close_and_flush() -> None:
    """Close the current global logger and reset the slot to a silent one."""
    global _GLOBAL_LOGGER
    with _LOCK:
        logger = _GLOBAL_LOGGER
        _GLOBAL_LOGGER = SilentLogger()
    logger.close()
