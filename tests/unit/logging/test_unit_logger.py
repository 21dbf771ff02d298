# tests/unit/logging/test_unit_logger.py - v2
"""Tests for logging/logger.py: logger factory and formatters."""

from __future__ import annotations

import json
import logging
import sys

from myday.logging.context import set_report_context, set_step_context
from myday.logging.logger import (
    ROOT_LOGGER_NAME,
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Hello", level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=level, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert parsed["logger"] == "test"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_report_context("2026-10-19_abc", "summary_1")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {"report_id": "2026-10-19_abc", "session_id": "summary_1"}

    def test_extra_data(self):
        record = _record()
        record.data = {"cache_status": "hit"}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"cache_status": "hit"}

    def test_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed", logging.ERROR, sys.exc_info())
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "[INFO    ]" in output

    def test_includes_report_and_step(self):
        set_report_context("2026-10-19_abc")
        set_step_context("enforce_length")
        output = TextFormatter().format(_record())
        assert "[2026-10-19_abc]" in output
        assert "(enforce_length)" in output


class TestGetLogger:
    def test_returns_child_of_root(self):
        logger = get_logger("test_module")
        assert logger.name == f"{ROOT_LOGGER_NAME}.test_module"


class TestSetupLogging:
    def teardown_method(self):
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    def test_level_and_single_handler(self):
        root = setup_logging(level="DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_repeat_calls_do_not_duplicate(self):
        setup_logging()
        root = setup_logging()
        assert len(root.handlers) == 1

    def test_json_format(self):
        root = setup_logging(log_format="json")
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "myday.log"
        root = setup_logging(log_file=log_file)
        assert len(root.handlers) == 2
        logging.getLogger(f"{ROOT_LOGGER_NAME}.test").info("to file")
        for handler in root.handlers:
            handler.flush()
        assert "to file" in log_file.read_text()
