from __future__ import annotations

import logging
from collections.abc import Iterator
from threading import Lock

from ..core.errors import MissingArgumentError


class LoggerProviderCollection:
    """
    Ordered set of standard library handlers fed by a structured pipeline.

    Wire it into a pipeline with ``configuration.write_to.providers(collection)``;
    handlers added later, e.g. by a logger factory, start receiving events
    immediately.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._providers: tuple[logging.Handler, ...] = ()

    @property
    def providers(self) -> tuple[logging.Handler, ...]:
        return self._providers

    def add_provider(self, provider: logging.Handler) -> None:
        if provider is None:
            raise MissingArgumentError("provider")
        with self._lock:
            if provider in self._providers:
                return
            self._providers = (*self._providers, provider)

    def __iter__(self) -> Iterator[logging.Handler]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
