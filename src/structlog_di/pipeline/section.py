from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel as _PydanticBaseModel
from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .events import normalize_level


class _SectionModel(_PydanticBaseModel):
    """Base for configuration sections: camelCase keys, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class ConsoleSection(_SectionModel):
    enabled: bool = True
    format: Literal["json", "console"] = "json"


class LoggingSection(_SectionModel):
    """
    Logging section of an application configuration mapping.

    Example::

        {
            "minimumLevel": "debug",
            "overrides": {"urllib3": "warning"},
            "properties": {"application": "billing"},
            "console": {"format": "console"},
        }
    """

    minimum_level: str = "info"
    overrides: dict[str, str] = Field(default_factory=dict)
    properties: dict[str, Any] = Field(default_factory=dict)
    console: ConsoleSection | None = None
    from_log_context: bool = True

    @field_validator("minimum_level")
    @classmethod
    def _validate_minimum_level(cls, value: str) -> str:
        return normalize_level(value)

    @field_validator("overrides")
    @classmethod
    def _validate_overrides(cls, value: dict[str, str]) -> dict[str, str]:
        return {prefix: normalize_level(level) for prefix, level in value.items()}

