"""Standard library ``logging`` side of the integration."""

from .factory import StructlogLoggerFactory
from .impl.handler import PipelineHandler, record_to_template
from .protocol import LoggerFactoryProtocol
from .providers import LoggerProviderCollection

__all__ = [
    "LoggerFactoryProtocol",
    "LoggerProviderCollection",
    "PipelineHandler",
    "StructlogLoggerFactory",
    "record_to_template",
]
