"""
Unit Tests: Structured Logging

Tests:
    - JSON output with extras and bound context
    - Level parsing
    - setup_logging handler installation
"""

import io
import json
import logging

import pytest

from s3presign.observability.logging import (
    JsonFormatter,
    LogLevel,
    StructuredLogger,
    setup_logging,
)


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def stream(restore_root):
    buffer = io.StringIO()
    setup_logging(LogLevel.DEBUG, json_output=True, stream=buffer)
    return buffer


def _lines(buffer):
    return [json.loads(line) for line in buffer.getvalue().splitlines()]


class TestJsonFormatter:
    """Tests for JSON formatting."""

    def test_fields(self):
        record = logging.LogRecord(
            "s3presign.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
        )
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "s3presign.test"
        assert data["@timestamp"].endswith("+00:00")

    def test_extras(self):
        record = logging.makeLogRecord({"name": "x", "levelname": "DEBUG", "msg": "m", "key": "a.jpg"})
        data = json.loads(JsonFormatter().format(record))
        assert data["key"] == "a.jpg"
        assert "msg" not in data
        assert "args" not in data


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_keyword_extras(self, stream):
        StructuredLogger("s3presign.test").info("signed", key="a.jpg", expires_in=60)
        (line,) = _lines(stream)
        assert line["message"] == "signed"
        assert line["key"] == "a.jpg"
        assert line["expires_in"] == 60

    def test_context(self, stream):
        logger = StructuredLogger("s3presign.test")
        with logger.context(request_id="r-1"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _lines(stream)
        assert inside["request_id"] == "r-1"
        assert "request_id" not in outside

    def test_level_filtering(self, restore_root):
        buffer = io.StringIO()
        setup_logging(LogLevel.WARNING, stream=buffer)
        logger = StructuredLogger("s3presign.test")
        logger.info("dropped")
        logger.error("kept")
        assert [line["message"] for line in _lines(buffer)] == ["kept"]

    def test_plain_text(self, restore_root):
        buffer = io.StringIO()
        setup_logging(LogLevel.INFO, json_output=False, stream=buffer)
        StructuredLogger("s3presign.test").info("plain")
        assert "| INFO     | s3presign.test | plain" in buffer.getvalue()


class TestLogLevel:
    """Tests for LogLevel.parse."""

    @pytest.mark.parametrize("name", ["debug", "DEBUG", " Debug "])
    def test_parse(self, name):
        assert LogLevel.parse(name) is LogLevel.DEBUG

    def test_unknown(self):
        with pytest.raises(KeyError):
            LogLevel.parse("verbose")
