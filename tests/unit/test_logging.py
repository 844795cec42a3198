# tests/unit/test_logging.py
"""Tests for the stderr JSON logging setup."""

import json
import logging
import sys

from scope_intake.logging_config import JsonFormatter, configure_logging, level_for_verbosity


class TestJsonFormatter:
    def test_formats_json_line(self):
        record = logging.LogRecord("scope_intake.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["level"] == "INFO"
        assert data["logger"] == "scope_intake.test"
        assert data["msg"] == "hello world"
        assert "exc" not in data

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exc"]


class TestConfigureLogging:
    def test_single_stderr_handler(self):
        """Repeated calls leave exactly one handler on the root logger."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(logging.DEBUG)
            configure_logging(logging.DEBUG)
            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_verbosity_levels(self):
        assert level_for_verbosity("quiet") == logging.WARNING
        assert level_for_verbosity("normal") == logging.INFO
        assert level_for_verbosity("verbose") == logging.DEBUG
        assert level_for_verbosity("shouting") == logging.INFO
