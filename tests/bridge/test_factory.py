import logging

import pytest

from structlog_di import (
    InMemorySink,
    Logger,
    LoggerConfiguration,
    LoggerFactoryProtocol,
    LoggerProviderCollection,
    MissingArgumentError,
    SilentLogger,
    StructlogLoggerFactory,
    get_global_logger,
    set_global_logger,
)
from structlog_di.bridge import record_to_template


class _RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []
        self.closed = False

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def close(self) -> None:
        self.closed = True
        super().close()


def _logger_with_sink(sink: InMemorySink, *, minimum_level: str = "debug") -> Logger:
    return (
        LoggerConfiguration()
        .minimum_level(minimum_level)
        .write_to.in_memory(sink)
        .create_logger()
    )


def test_factory_satisfies_protocol() -> None:
    assert isinstance(StructlogLoggerFactory(), LoggerFactoryProtocol)


def test_create_logger_returns_one_detached_logger_per_category() -> None:
    factory = StructlogLoggerFactory()

    first = factory.create_logger("app.orders")

    assert factory.create_logger("app.orders") is first
    assert factory.create_logger("app.billing") is not first
    assert first.propagate is False
    assert first is not logging.getLogger("app.orders")


def test_brace_template_consumes_positional_arguments() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))

    factory.create_logger("x").info("Hello {name}", "world")

    (event,) = sink.events
    assert event.message == "Hello world"
    assert event.message_template == "Hello {name}"
    assert event.properties["name"] == "world"
    assert event.source_context == "x"


def test_percent_style_messages_are_rendered_by_the_record() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))

    factory.create_logger("x").warning("%s of %d done", "half", 10)

    (event,) = sink.events
    assert event.level == "warning"
    assert event.message == "half of 10 done"


def test_extra_attributes_become_properties() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))

    factory.create_logger("x").error("Payment declined", extra={"order_id": 42})

    (event,) = sink.events
    assert event.properties["order_id"] == 42
    assert "lineno" not in event.properties


def test_exceptions_are_forwarded() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))

    try:
        raise KeyError("missing")
    except KeyError:
        factory.create_logger("x").exception("Lookup failed")

    (event,) = sink.events
    assert event.exc_info is not None
    assert event.exc_info[0] is KeyError


def test_pipeline_level_gate_applies_to_stdlib_records() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink, minimum_level="info"))

    logger = factory.create_logger("x")
    logger.debug("hidden")
    logger.info("shown")

    assert sink.messages() == ["shown"]


def test_factory_without_logger_follows_global_logger() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory()
    logger = factory.create_logger("x")

    logger.info("before")
    set_global_logger(_logger_with_sink(sink))
    logger.info("after")

    assert sink.messages() == ["after"]


def test_close_without_dispose_leaves_logger_open() -> None:
    sink = InMemorySink()
    pipeline_logger = _logger_with_sink(sink)

    StructlogLoggerFactory(pipeline_logger).close()

    assert not pipeline_logger.closed


def test_close_with_dispose_closes_given_logger_once() -> None:
    sink = InMemorySink()
    pipeline_logger = _logger_with_sink(sink)
    set_global_logger(pipeline_logger)
    factory = StructlogLoggerFactory(pipeline_logger, dispose=True)

    factory.close()
    factory.close()

    assert factory.closed
    assert pipeline_logger.closed
    assert get_global_logger() is pipeline_logger


def test_close_with_dispose_and_no_logger_flushes_global_logger() -> None:
    sink = InMemorySink()
    pipeline_logger = _logger_with_sink(sink)
    set_global_logger(pipeline_logger)

    with StructlogLoggerFactory(dispose=True):
        pass

    assert pipeline_logger.closed
    assert isinstance(get_global_logger(), SilentLogger)


def test_add_provider_without_collection_is_ignored(
    caplog: pytest.LogCaptureFixture,
) -> None:
    factory = StructlogLoggerFactory()
    handler = _RecordingHandler()

    with caplog.at_level(logging.WARNING, logger="structlog_di.bridge.factory"):
        factory.add_provider(handler)

    assert "Ignoring added logger provider" in caplog.text


def test_add_provider_rejects_none() -> None:
    with pytest.raises(MissingArgumentError):
        StructlogLoggerFactory().add_provider(None)  # type: ignore[arg-type]


def test_added_providers_receive_pipeline_events() -> None:
    collection = LoggerProviderCollection()
    sink = InMemorySink()
    pipeline_logger = (
        LoggerConfiguration()
        .write_to.in_memory(sink)
        .write_to.providers(collection)
        .create_logger()
    )
    factory = StructlogLoggerFactory(pipeline_logger, True, collection)
    handler = _RecordingHandler()

    factory.add_provider(handler)
    factory.create_logger("app.orders").info("Order {order_id} placed", 7)

    (record,) = handler.records
    assert record.getMessage() == "Order 7 placed"
    assert record.name == "app.orders"
    assert getattr(record, "order_id") == 7
    assert sink.messages() == ["Order 7 placed"]


def test_begin_scope_adds_properties_to_events_inside_block() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))
    logger = factory.create_logger("x")

    with factory.begin_scope(request_id="r-9"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = sink.events
    assert inside.properties["request_id"] == "r-9"
    assert "request_id" not in outside.properties


def test_record_to_template_falls_back_when_counts_differ() -> None:
    record = logging.LogRecord(
        "x", logging.INFO, __file__, 1, "%s {b} %s", ("a", "c"), None
    )

    template, properties = record_to_template(record)

    assert template == "a {b} c"
    assert "b" not in properties


def test_provider_collection_deduplicates_and_rejects_none() -> None:
    collection = LoggerProviderCollection()
    handler = _RecordingHandler()

    collection.add_provider(handler)
    collection.add_provider(handler)

    assert collection.providers == (handler,)
    assert len(collection) == 1
    with pytest.raises(MissingArgumentError):
        collection.add_provider(None)  # type: ignore[arg-type]


def test_extra_named_like_event_fields_is_kept() -> None:
    sink = InMemorySink()
    factory = StructlogLoggerFactory(_logger_with_sink(sink))

    factory.create_logger("app").info(
        "User did {event}", extra={"event": "signup", "level": "gold"}
    )

    (event,) = sink.events
    assert event.message == "User did signup"
    assert event.level == "info"
    assert event.properties["event"] == "signup"
    assert event.properties["level"] == "gold"
    assert event.source_context == "app"
