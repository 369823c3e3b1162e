from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ...pipeline.events import SOURCE_CONTEXT, level_for_number, template_holes
from ...pipeline.protocol import LoggerProtocol

_BUILTIN_LOG_RECORD_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "message",
    "module",
    "msecs",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class PipelineHandler(logging.Handler):
    """Forwards standard library records into a structured logger.

    ``resolve_logger`` is called for every record, so a factory built
    without an explicit logger follows the global slot as it changes.
    """

    def __init__(
        self,
        resolve_logger: Callable[[], LoggerProtocol],
        category: str,
    ) -> None:
        super().__init__()
        self._resolve_logger = resolve_logger
        self._category = category

    def emit(self, record: logging.LogRecord) -> None:
        try:
            template, properties = record_to_template(record)
            properties.setdefault(SOURCE_CONTEXT, self._category)
            self._resolve_logger().write(
                level_for_number(record.levelno),
                template,
                exc_info=record.exc_info,
                **properties,
            )
        except Exception:
            self.handleError(record)


def record_to_template(record: logging.LogRecord) -> tuple[str, dict[str, Any]]:
    """
    Split a record into a message template and its properties.

    ``{name}`` holes in the message consume positional arguments in order;
    ``%``-style messages are rendered by the record itself. Attributes
    passed through ``extra=`` become properties.
    """
    properties = {
        key: value
        for key, value in record.__dict__.items()
        if key not in _BUILTIN_LOG_RECORD_ATTRS
    }
    template = str(record.msg)
    args = record.args
    if not args:
        return template, properties

    holes = template_holes(template)
    if isinstance(args, tuple) and holes and len(holes) == len(args):
        for name, value in zip(holes, args):
            properties.setdefault(name, value)
        return template, properties
    return record.getMessage(), properties
