from collections.abc import Iterator

import pytest

from structlog_di import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def _reset_global_logger() -> Iterator[None]:
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())
