from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any

import structlog

from ..events import LEVELS, SOURCE_CONTEXT, SysExcInfo, render_template
from ..protocol import EventDict

# Pipeline metadata keys. Caller properties keep their own names and arrive
# as one mapping under PROPERTIES_KEY.
PROPERTIES_KEY = "_properties"
TEMPLATE_KEY = "_template"
MESSAGE_KEY = "_message"
LEVEL_KEY = "_level"
TIMESTAMP_KEY = "_timestamp"
EXC_INFO_KEY = "_exc_info"
RESERVED_KEYS = frozenset(
    {
        PROPERTIES_KEY,
        TEMPLATE_KEY,
        MESSAGE_KEY,
        LEVEL_KEY,
        TIMESTAMP_KEY,
        EXC_INFO_KEY,
    }
)


class PropertyEnricher:
    """Adds a fixed property unless the event already carries it."""

    def __init__(self, name: str, value: Any) -> None:
        self._name = name
        self._value = value

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault(self._name, self._value)
        return event_dict


class LevelGate:
    """Drops events below the minimum level of their source context."""

    def __init__(
        self, minimum: str, overrides: Mapping[str, str] | None = None
    ) -> None:
        self._minimum = LEVELS[minimum]
        # Longest prefix first so the most specific override wins.
        self._overrides = sorted(
            ((prefix, LEVELS[level]) for prefix, level in (overrides or {}).items()),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def is_enabled(self, level: str, source_context: str | None = None) -> bool:
        return LEVELS[level] >= self._threshold(source_context)

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict:
        level = event_dict.get(LEVEL_KEY, method_name)
        source = event_dict.get(SOURCE_CONTEXT)
        if not self.is_enabled(level, None if source is None else str(source)):
            raise structlog.DropEvent
        return event_dict

    def _threshold(self, source_context: str | None) -> int:
        if source_context:
            for prefix, threshold in self._overrides:
                if source_context == prefix or source_context.startswith(
                    prefix + "."
                ):
                    return threshold
        return self._minimum


def unpack_properties(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Lift the caller's properties to the top level of the event dict."""
    properties = event_dict.pop(PROPERTIES_KEY, None) or {}
    for key, value in properties.items():
        if key not in RESERVED_KEYS:
            event_dict[key] = value
    return event_dict


def add_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict[LEVEL_KEY] = method_name
    return event_dict


def render_message(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    template = str(event_dict.get(TEMPLATE_KEY, ""))
    properties = {
        key: value
        for key, value in event_dict.items()
        if key not in RESERVED_KEYS
    }
    event_dict[MESSAGE_KEY] = render_template(template, properties)
    return event_dict


def capture_exc_info(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Normalise ``exc_info`` to a ``sys.exc_info()`` tuple or remove it."""
    exc_info = event_dict.pop(EXC_INFO_KEY, None)
    resolved = _resolve_exc_info(exc_info)
    if resolved is not None:
        event_dict[EXC_INFO_KEY] = resolved
    return event_dict


def _resolve_exc_info(exc_info: Any) -> SysExcInfo | None:
    if not exc_info:
        return None
    if isinstance(exc_info, BaseException):
        return (type(exc_info), exc_info, exc_info.__traceback__)
    if isinstance(exc_info, tuple):
        if exc_info[0] is None:
            return None
        return exc_info
    current = sys.exc_info()
    if current[0] is None:
        return None
    return current
