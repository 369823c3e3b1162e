"""
Register a structured logging pipeline as the container's logger factory.

Three entry points, from least to most control handed to the container:

* :func:`use_logger` registers a factory over a logger the caller built
  (or over the global logger).
* :func:`use_logger_configuration` builds the logger inside the container
  from a configuration callback.
* :func:`use_logger_configuration_with_services` does the same, passing
  the container to the callback so configuration can depend on other
  services.

Services registered here (names in :mod:`structlog_di.di.services`):
``logger_factory`` always; ``registered_logger``, ``logger`` and
``logging_registration`` for the configuration-based entry points.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dependency_injector import containers

from ..bridge.factory import StructlogLoggerFactory
from ..bridge.providers import LoggerProviderCollection
from ..core.errors import MissingArgumentError
from ..core.registration_state import LoggingRegistration, RegistrationState
from ..pipeline.configuration import LoggerConfiguration
from ..pipeline.global_logger import set_global_logger
from ..pipeline.protocol import EventDict, LoggerProtocol
from .services import (
    LOGGER,
    LOGGER_FACTORY,
    LOGGER_PROVIDERS,
    LOGGING_REGISTRATION,
    REGISTERED_LOGGER,
    add_singleton,
    get_required_service,
    get_services,
)

_LOGGER = logging.getLogger(__name__)

ConfigureLogger = Callable[[LoggerConfiguration], None]
ConfigureLoggerWithServices = Callable[
    [containers.Container, LoggerConfiguration], None
]


class NullEnricher:
    """Enricher that leaves events untouched.

    Deriving with it yields a handle that shares the pipeline without
    owning it.
    """

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict:
        return event_dict


@dataclass(frozen=True, slots=True)
class RegisteredLogger:
    """
    Carries the pipeline's owning handle through the container.

    It has no ``close()``: the container cannot dispose the handle through
    it, whichever way it is registered. Disposal belongs to the logger
    factory.
    """

    logger: LoggerProtocol


def use_logger(
    container: containers.Container,
    logger: LoggerProtocol | None = None,
    *,
    dispose: bool = False,
    providers: LoggerProviderCollection | None = None,
) -> containers.Container:
    """
    Register a logger factory over an existing logger.

    :param logger: The handle to write to; when omitted the global logger
        is used.
    :param dispose: Close ``logger`` when the container shuts down. When
        ``logger`` is omitted, :func:`close_and_flush` is called on the
        global logger instead.
    :param providers: Collection registered in the pipeline with
        ``write_to.providers(...)``. Every handler registered with
        :func:`add_logger_provider` is added to it, so standard library
        handlers receive events too. By default only sinks do.
    :return: The container.
    """
    if container is None:
        raise MissingArgumentError("container")

    def build_logger_factory(services: containers.Container) -> StructlogLoggerFactory:
        factory = StructlogLoggerFactory(logger, dispose, providers)
        if providers is not None:
            for provider in get_services(services, LOGGER_PROVIDERS):
                factory.add_provider(provider)
        return factory

    add_singleton(container, LOGGER_FACTORY, build_logger_factory, dispose=True)
    _LOGGER.debug(
        "Registered logger factory (explicit_logger=%s, dispose=%s, providers=%s)",
        logger is not None,
        dispose,
        providers is not None,
    )
    return container


def use_logger_configuration(
    container: containers.Container,
    configure_logger: ConfigureLogger,
    *,
    preserve_global_logger: bool = False,
    write_to_providers: bool = False,
) -> containers.Container:
    """
    Build the logger inside the container from ``configure_logger``.

    See :func:`use_logger_configuration_with_services` for the meaning of
    the flags.
    """
    if container is None:
        raise MissingArgumentError("container")
    if configure_logger is None:
        raise MissingArgumentError("configure_logger")

    return use_logger_configuration_with_services(
        container,
        lambda services, configuration: configure_logger(configuration),
        preserve_global_logger=preserve_global_logger,
        write_to_providers=write_to_providers,
    )


def use_logger_configuration_with_services(
    container: containers.Container,
    configure_logger: ConfigureLoggerWithServices,
    *,
    preserve_global_logger: bool = False,
    write_to_providers: bool = False,
) -> containers.Container:
    """
    Build the logger inside the container, giving the callback the container.

    Nothing is built until the first resolution of ``registered_logger``,
    ``logger`` or ``logger_factory``; the pipeline is built once per
    container and closed when the container shuts down.

    :param configure_logger: Called once with the container and a fresh
        :class:`LoggerConfiguration`.
    :param preserve_global_logger: Leave the global logger alone. By
        default the built logger is installed as the global logger and
        container shutdown closes it and resets the global logger to a
        silent one. When preserved, shutdown closes only the built logger.
    :param write_to_providers: Also send events to every handler registered
        with :func:`add_logger_provider`. By default only sinks configured
        on the pipeline receive events.
    :return: The container.
    """
    if container is None:
        raise MissingArgumentError("container")
    if configure_logger is None:
        raise MissingArgumentError("configure_logger")

    registration = LoggingRegistration()
    provider_collection: LoggerProviderCollection | None = None
    if write_to_providers:
        provider_collection = LoggerProviderCollection()

    def build_registered_logger(services: containers.Container) -> RegisteredLogger:
        registration.require(RegistrationState.REGISTERED)
        configuration = LoggerConfiguration()
        if provider_collection is not None:
            configuration.write_to.providers(provider_collection)
        configure_logger(services, configuration)
        logger = configuration.create_logger()
        registration.built()
        return RegisteredLogger(logger)

    def build_forwarding_logger(services: containers.Container) -> LoggerProtocol:
        logger = get_required_service(services, REGISTERED_LOGGER).logger
        return logger.for_context(NullEnricher())

    def build_logger_factory(services: containers.Container) -> StructlogLoggerFactory:
        logger = get_required_service(services, REGISTERED_LOGGER).logger
        registration.require(RegistrationState.BUILT)

        registered_logger: LoggerProtocol | None = None
        if preserve_global_logger:
            registered_logger = logger
        else:
            # With no logger the factory disposes through close_and_flush(),
            # which also resets the global logger to a silent one.
            set_global_logger(logger)

        factory = StructlogLoggerFactory(registered_logger, True, provider_collection)
        if write_to_providers:
            for provider in get_services(services, LOGGER_PROVIDERS):
                factory.add_provider(provider)
        return factory

    add_singleton(container, LOGGING_REGISTRATION, lambda services: registration)
    add_singleton(container, REGISTERED_LOGGER, build_registered_logger)
    add_singleton(container, LOGGER, build_forwarding_logger)
    add_singleton(
        container,
        LOGGER_FACTORY,
        build_logger_factory,
        dispose=True,
        on_dispose=registration.disposed,
    )
    registration.registered()
    _LOGGER.debug(
        "Registered configured logger (preserve_global_logger=%s, "
        "write_to_providers=%s)",
        preserve_global_logger,
        write_to_providers,
    )
    return container
