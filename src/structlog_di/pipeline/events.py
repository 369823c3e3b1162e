from __future__ import annotations

import logging
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, TypeAlias

from ..core.errors import LoggingConfigurationError

ExcInfo: TypeAlias = (
    bool
    | BaseException
    | tuple[type[BaseException], BaseException, TracebackType | None]
    | tuple[None, None, None]
    | None
)
SysExcInfo: TypeAlias = tuple[
    type[BaseException], BaseException, TracebackType | None
]

SOURCE_CONTEXT = "source_context"

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_LEVEL_ALIASES = {
    "warn": "warning",
    "fatal": "critical",
    "exception": "error",
    "information": "info",
}

_FORMATTER = string.Formatter()


@dataclass(frozen=True, slots=True)
class LogEvent:
    timestamp: str
    level: str
    message_template: str
    message: str
    properties: Mapping[str, Any] = field(default_factory=dict)
    exc_info: SysExcInfo | None = None

    @property
    def levelno(self) -> int:
        return LEVELS[self.level]

    @property
    def source_context(self) -> str | None:
        value = self.properties.get(SOURCE_CONTEXT)
        return None if value is None else str(value)


def normalize_level(level: str | int) -> str:
    """Return the canonical level name for a name or a stdlib level number."""
    if isinstance(level, int):
        return level_for_number(level)
    name = level.strip().lower()
    name = _LEVEL_ALIASES.get(name, name)
    if name not in LEVELS:
        raise LoggingConfigurationError(f"Invalid log level: {level!r}")
    return name


def level_for_number(levelno: int) -> str:
    """Map a stdlib level number to the nearest level name at or below it."""
    resolved = "debug"
    for name, number in LEVELS.items():
        if levelno >= number:
            resolved = name
    return resolved


def template_holes(template: str) -> list[str]:
    """Names of the ``{name}`` holes in ``template``, in first-use order."""
    names: list[str] = []
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError:
        return names
    for _, field_name, _, _ in parsed:
        if not field_name:
            continue
        name = _hole_name(field_name)
        if name not in names:
            names.append(name)
    return names


def render_template(template: str, properties: Mapping[str, Any]) -> str:
    """
    Fill the named holes of a message template from ``properties``.

    Holes may carry a conversion and a format spec (``{elapsed:.2f}``).
    Holes with no matching property are left as written.
    """
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError:
        return template

    parts: list[str] = []
    for literal, field_name, format_spec, conversion in parsed:
        parts.append(literal)
        if field_name is None:
            continue
        name = _hole_name(field_name)
        if not name or name not in properties:
            parts.append(_original_hole(field_name, format_spec, conversion))
            continue
        value = properties[name]
        try:
            value = _FORMATTER.convert_field(value, conversion)
            parts.append(format(value, format_spec or ""))
        except (TypeError, ValueError):
            parts.append(str(value))
    return "".join(parts)


def _hole_name(field_name: str) -> str:
    return field_name.lstrip("@$")


def _original_hole(
    field_name: str, format_spec: str | None, conversion: str | None
) -> str:
    hole = field_name
    if conversion:
        hole += f"!{conversion}"
    if format_spec:
        hole += f":{format_spec}"
    return "{" + hole + "}"
