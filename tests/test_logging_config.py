"""Tests for ratmath logging setup."""

import logging
import sys

import pytest

from ratmath_pkg.api import evaluate
from ratmath_pkg.logging_config import StructuredFormatter, get_logger, setup_logging


@pytest.fixture
def ratmath_logger():
    logger = logging.getLogger("ratmath")
    saved = (logger.level, list(logger.handlers))
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved[0])
    for handler in saved[1]:
        logger.addHandler(handler)


def _record(msg, *args, exc_info=None, **attrs):
    record = logging.LogRecord("ratmath.api", logging.INFO, __file__, 1, msg, args, exc_info)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_line_layout(self):
        line = StructuredFormatter().format(_record("parsed %s", "1/2"))
        assert line.endswith(" [INFO] ratmath.api: parsed 1/2")

    def test_error_code_suffix(self):
        line = StructuredFormatter().format(_record("failed", error_code="DIVISION_BY_ZERO"))
        assert line.endswith("failed code=DIVISION_BY_ZERO")

    def test_traceback_follows_message(self):
        try:
            raise ValueError("boom")
        except ValueError:
            line = StructuredFormatter().format(_record("oops", exc_info=sys.exc_info()))
        first, rest = line.split("\n", 1)
        assert first.endswith("oops")
        assert "ValueError: boom" in rest


class TestSetup:
    def test_component_names(self):
        assert get_logger("parser").name == "ratmath.parser"
        assert get_logger("ratmath.cli").name == "ratmath.cli"
        assert get_logger().name == "ratmath"

    def test_repeated_setup_replaces_handlers(self, ratmath_logger):
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        assert len(ratmath_logger.handlers) == 1
        assert ratmath_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, ratmath_logger):
        setup_logging("chatty")
        assert ratmath_logger.level == logging.INFO

    def test_failed_evaluation_logs_code(self, ratmath_logger, tmp_path):
        log_file = tmp_path / "ratmath.log"
        setup_logging("INFO", str(log_file))
        evaluate("1/0")
        for handler in ratmath_logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "[INFO] ratmath.api:" in text
        assert "code=ZERO_DENOMINATOR" in text
