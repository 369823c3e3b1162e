from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock
from types import TracebackType
from typing import Any, override

import structlog

from ..core.errors import MissingArgumentError
from ..pipeline.global_logger import close_and_flush, get_global_logger
from ..pipeline.protocol import LoggerProtocol
from .impl.handler import PipelineHandler
from .protocol import LoggerFactoryProtocol
from .providers import LoggerProviderCollection

_LOGGER = logging.getLogger(__name__)


class StructlogLoggerFactory(LoggerFactoryProtocol):
    """
    Logger factory backed by a structured logging pipeline.

    :param logger: The handle to write to. When ``None`` the global logger
        is looked up for every event.
    :param dispose: When ``True``, :meth:`close` closes ``logger``; if
        ``logger`` is ``None`` it calls :func:`close_and_flush` instead,
        which also resets the global logger to a silent one.
    :param provider_collection: Collection wired into the pipeline with
        ``write_to.providers(...)``. Providers added through
        :meth:`add_provider` go there; without a collection they are
        ignored.
    """

    def __init__(
        self,
        logger: LoggerProtocol | None = None,
        dispose: bool = False,
        provider_collection: LoggerProviderCollection | None = None,
    ) -> None:
        self._logger = logger
        self._dispose = dispose
        self._provider_collection = provider_collection
        self._lock = Lock()
        self._loggers: dict[str, logging.Logger] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @override
    def create_logger(self, category: str) -> logging.Logger:
        with self._lock:
            logger = self._loggers.get(category)
            if logger is None:
                # Detached from logging.root: records only reach the pipeline.
                logger = logging.Logger(category)
                logger.propagate = False
                logger.addHandler(PipelineHandler(self._resolve_logger, category))
                self._loggers[category] = logger
            return logger

    @override
    def add_provider(self, provider: logging.Handler) -> None:
        if provider is None:
            raise MissingArgumentError("provider")
        if self._provider_collection is not None:
            self._provider_collection.add_provider(provider)
            return
        _LOGGER.warning(
            "Ignoring added logger provider %r; the factory has no provider "
            "collection",
            provider,
        )

    @contextmanager
    def begin_scope(self, **properties: Any) -> Iterator[None]:
        """Attach ``properties`` to every event logged inside the block."""
        with structlog.contextvars.bound_contextvars(**properties):
            yield

    @override
    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        if not self._dispose:
            return
        if self._logger is None:
            close_and_flush()
        else:
            self._logger.close()

    def _resolve_logger(self) -> LoggerProtocol:
        if self._logger is not None:
            return self._logger
        return get_global_logger()

    def __enter__(self) -> "StructlogLoggerFactory":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
