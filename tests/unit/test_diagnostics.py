import json
import logging

import pytest

from character_render.config import RenderConfig
from character_render.diagnostics import format_anomaly, format_decode_failure, log_report
from character_render.logging_setup import (
    HANDLER_NAME,
    ContextTextFormatter,
    JsonLineFormatter,
    configure_logging,
)


def test_format_anomaly() -> None:
    message = format_anomaly("giko", {"version": "normal", "pose": "sit"})
    assert message == (
        'ERROR! falsy element in raw image layers, giko {"pose": "sit", "version": "normal"}'
    )
    assert format_decode_failure("giko", {}).startswith("ERROR! failed to decode")


def test_log_report_logs_error(caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="character_render.diagnostics"):
        log_report("boom")
    assert [r.getMessage() for r in caplog.records] == ["boom"]


def make_record(**context) -> logging.LogRecord:
    record = logging.LogRecord(
        "character_render.loader", logging.INFO, __file__, 1, "Applied %d", (8,), None
    )
    for key, value in context.items():
        setattr(record, key, value)
    return record


def test_json_formatter_surfaces_context_fields() -> None:
    out = json.loads(JsonLineFormatter().format(make_record(character="giko", generation=2)))
    assert out["message"] == "Applied 8"
    assert out["character"] == "giko"
    assert out["generation"] == 2
    assert out["level"] == "INFO"
    assert "bucket" not in out


def test_text_formatter_appends_context() -> None:
    line = ContextTextFormatter().format(make_record(character="giko", outcome="applied"))
    assert line.endswith("Applied 8 [character=giko outcome=applied]")
    assert ContextTextFormatter().format(make_record()).endswith("Applied 8")


def package_handlers() -> list:
    logger = logging.getLogger("character_render")
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


def test_configure_logging_follows_config_and_replaces_handler() -> None:
    logger = logging.getLogger("character_render")
    try:
        first = RenderConfig(log_level="debug", log_format="json").apply_logging()
        assert isinstance(first.formatter, JsonLineFormatter)
        assert logger.level == logging.DEBUG

        second = configure_logging(RenderConfig(log_level="WARNING"))
        assert package_handlers() == [second]
        assert isinstance(second.formatter, ContextTextFormatter)
        assert first not in logger.handlers
        assert logger.level == logging.WARNING
    finally:
        for handler in package_handlers():
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_configure_logging_rejects_unknown_level() -> None:
    try:
        with pytest.raises(ValueError):
            configure_logging(RenderConfig(log_level="chatty"))
    finally:
        logger = logging.getLogger("character_render")
        for handler in package_handlers():
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
