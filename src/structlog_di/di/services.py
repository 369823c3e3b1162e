"""
Service registration helpers over a dependency-injector container.

Services are registered by name on a ``DynamicContainer`` (an instance of
a declarative container is one too). Factories receive the container, so
they can resolve other services lazily, and run at first resolution.
Registering a name again replaces the previous provider.

Ownership is explicit: a service registered with ``dispose=True`` is a
``providers.Resource`` whose ``close()`` runs on
``container.shutdown_resources()``; any other service is a plain
``providers.Singleton`` the container never disposes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Protocol, TypeVar

from dependency_injector import containers, providers

from ..core.errors import MissingArgumentError, ServiceNotRegisteredError

_LOGGER = logging.getLogger(__name__)

LOGGER_FACTORY = "logger_factory"
LOGGER = "logger"
REGISTERED_LOGGER = "registered_logger"
LOGGER_PROVIDERS = "logger_providers"
LOGGING_REGISTRATION = "logging_registration"


class Closeable(Protocol):
    def close(self) -> None: ...


TCloseable = TypeVar("TCloseable", bound=Closeable)


def add_singleton(
    container: containers.Container,
    name: str,
    factory: Callable[[containers.Container], Any],
    *,
    dispose: bool = False,
    on_dispose: Callable[[], None] | None = None,
) -> containers.Container:
    if container is None:
        raise MissingArgumentError("container")
    if factory is None:
        raise MissingArgumentError("factory")
    if dispose:
        provider: providers.Provider[Any] = providers.Resource(
            _owned_instance, factory, providers.Object(container), on_dispose
        )
    else:
        provider = providers.Singleton(factory, providers.Object(container))
    container.set_provider(name, provider)
    _LOGGER.debug("Registered service %r (dispose=%s)", name, dispose)
    return container


def add_logger_provider(
    container: containers.Container,
    factory: Callable[[containers.Container], logging.Handler],
    *,
    dispose: bool = True,
) -> containers.Container:
    """Register a handler under :data:`LOGGER_PROVIDERS`.

    Handlers registered with ``dispose=True`` are closed on container
    teardown.
    """
    if container is None:
        raise MissingArgumentError("container")
    if factory is None:
        raise MissingArgumentError("factory")
    collection = container.providers.get(LOGGER_PROVIDERS)
    if not isinstance(collection, providers.List):
        collection = providers.List()
        container.set_provider(LOGGER_PROVIDERS, collection)
    if dispose:
        collection.add_args(
            providers.Resource(
                _owned_instance, factory, providers.Object(container), None
            )
        )
    else:
        collection.add_args(
            providers.Singleton(factory, providers.Object(container))
        )
    return container


def get_required_service(container: containers.Container, name: str) -> Any:
    if container is None:
        raise MissingArgumentError("container")
    provider = container.providers.get(name)
    if provider is None:
        raise ServiceNotRegisteredError(name)
    return provider()


def get_services(container: containers.Container, name: str) -> list[Any]:
    """Resolve every service registered under ``name``; empty when none is."""
    if container is None:
        raise MissingArgumentError("container")
    provider = container.providers.get(name)
    if provider is None:
        return []
    resolved = provider()
    if isinstance(resolved, (list, tuple)):
        return list(resolved)
    return [resolved]


def _owned_instance(
    factory: Callable[[containers.Container], TCloseable],
    container: containers.Container,
    on_dispose: Callable[[], None] | None,
) -> Iterator[TCloseable]:
    instance = factory(container)
    yield instance
    try:
        instance.close()
    finally:
        if on_dispose is not None:
            on_dispose()
