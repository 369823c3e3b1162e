from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ..core.errors import LoggingConfigurationError
from .events import normalize_level
from .impl.sinks import CONSOLE_FORMATS


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    level: str
    console_enabled: bool
    console_format: str
    from_log_context: bool
    application: str | None

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        level = normalize_level(_get_env_str("LOG_LEVEL", "INFO"))
        console_enabled = _get_env_bool("LOG_CONSOLE_ENABLED", True)
        console_format = _get_env_str("LOG_CONSOLE_FORMAT", "json").lower()
        if console_format not in CONSOLE_FORMATS:
            raise LoggingConfigurationError(
                f"Invalid LOG_CONSOLE_FORMAT: {console_format!r}"
            )
        from_log_context = _get_env_bool("LOG_FROM_CONTEXT", True)
        application = _get_env_optional("LOG_APPLICATION")
        return cls(
            level=level,
            console_enabled=console_enabled,
            console_format=console_format,
            from_log_context=from_log_context,
            application=application,
        )


def load_logging_settings(env_file: str | None = None) -> LoggingSettings:
    """Read settings from the environment, loading ``env_file`` first if given.

    Variables already present in the environment win over the file.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)
    return LoggingSettings.from_env()


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise LoggingConfigurationError(f"Invalid bool env var {name}={value!r}")


def _get_env_optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None
