import logging

import pytest

from structlog_di import LoggingConfigurationError
from structlog_di.pipeline import normalize_level, render_template, template_holes
from structlog_di.pipeline.events import level_for_number


def test_render_template_fills_named_holes() -> None:
    rendered = render_template(
        "Processed {count} items in {elapsed:.1f} ms",
        {"count": 3, "elapsed": 12.345},
    )
    assert rendered == "Processed 3 items in 12.3 ms"


def test_render_template_keeps_unknown_holes_and_escapes() -> None:
    rendered = render_template("{{literal}} {missing!r:>5} {}", {"other": 1})
    assert rendered == "{literal} {missing!r:>5} {}"


def test_render_template_ignores_capture_hints() -> None:
    assert render_template("User {@user}", {"user": "alice"}) == "User alice"


def test_render_template_returns_malformed_template_unchanged() -> None:
    assert render_template("broken {", {}) == "broken {"


def test_template_holes_in_first_use_order() -> None:
    assert template_holes("{b} then {a} then {b}") == ["b", "a"]


def test_normalize_level_accepts_aliases_and_numbers() -> None:
    assert normalize_level("WARN") == "warning"
    assert normalize_level("Information") == "info"
    assert normalize_level("fatal") == "critical"
    assert normalize_level(logging.ERROR) == "error"


def test_normalize_level_rejects_unknown_names() -> None:
    with pytest.raises(LoggingConfigurationError):
        normalize_level("verbose")


def test_level_for_number_uses_nearest_lower_level() -> None:
    assert level_for_number(5) == "debug"
    assert level_for_number(25) == "info"
    assert level_for_number(logging.CRITICAL + 10) == "critical"
