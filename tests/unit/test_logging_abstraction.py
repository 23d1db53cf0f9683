"""
Unit tests for logging_abstraction module.

Tests the JSON and human-readable formatters and handler setup.
"""

import json
import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

from esphome_native_client.correlation import correlation_context
from esphome_native_client.logging_abstraction import (
    PACKAGE_LOGGER,
    HumanReadableFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
    record_context,
)


def make_record(msg: str = "→ Sending %s", *args: object, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        "esphome_native_client.transport.connection",
        logging.INFO,
        "/src/connection.py",
        42,
        msg,
        args or ("PingRequest",),
        None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_package_logger() -> Generator[logging.Logger]:
    """Undo handler and level changes made by configure_logging"""
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield logger
    _ = configure_logging(log_format="none")
    logger.setLevel(level)


class TestRecordContext:
    """Tests for record_context"""

    def test_returns_only_extra_fields(self):
        """Test that standard record attributes are excluded"""
        record = make_record(device="10.0.0.20:6053", message_type="PingRequest")

        assert record_context(record) == {"device": "10.0.0.20:6053", "message_type": "PingRequest"}

    def test_empty_without_extra(self):
        """Test records without extra have no context"""
        assert record_context(make_record()) == {}


class TestJSONFormatter:
    """Tests for JSONFormatter"""

    def test_structured_output(self):
        """Test JSON output carries message, level and context"""
        record = make_record(device="10.0.0.20:6053")

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "→ Sending PingRequest"
        assert data["level"] == "INFO"
        assert data["line"] == 42
        assert data["context"] == {"device": "10.0.0.20:6053"}
        assert data["correlation_id"] is None

    def test_includes_correlation_id(self):
        """Test the active correlation ID is included"""
        with correlation_context(correlation_id="abc123"):
            data = json.loads(JSONFormatter().format(make_record()))

        assert data["correlation_id"] == "abc123"

    def test_includes_exception(self):
        """Test exception info is rendered"""
        try:
            raise ValueError("bad frame")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, "x.py", 1, "failed", (), exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError: bad frame" in data["exception"]


class TestHumanReadableFormatter:
    """Tests for HumanReadableFormatter"""

    def test_placeholder_without_correlation(self):
        """Test records outside an exchange show a placeholder ID"""
        output = HumanReadableFormatter().format(make_record())

        assert "[--------] > → Sending PingRequest" in output

    def test_short_correlation_id_and_context(self):
        """Test the correlation ID is shortened and context appended"""
        record = make_record(device="10.0.0.20:6053", bytes=0)

        with correlation_context(correlation_id="0123456789abcdef"):
            output = HumanReadableFormatter().format(record)

        assert "[01234567]" in output
        assert output.endswith("| device=10.0.0.20:6053 | bytes=0")


class TestConfigureLogging:
    """Tests for configure_logging and get_logger"""

    def test_repeated_calls_do_not_duplicate_handlers(self, restore_package_logger: logging.Logger):
        """Test that configuring twice replaces the previous handlers"""
        _ = configure_logging(log_format="human", human_output="stdout", level=logging.DEBUG)
        first = list(restore_package_logger.handlers)
        _ = configure_logging(log_format="human", human_output="stdout", level=logging.DEBUG)

        assert len(restore_package_logger.handlers) == len(first)
        assert restore_package_logger.level == logging.DEBUG

    def test_json_file_output(self, tmp_path: Path, restore_package_logger: logging.Logger):
        """Test JSON logs are written to the configured file"""
        json_file = tmp_path / "logs" / "client.json"
        logger = configure_logging(log_format="both", json_file=json_file, human_output="stderr", level=logging.INFO)

        logger.info("Connected to %s", "10.0.0.20:6053", extra={"elapsed_ms": 12.5})
        for handler in logger.handlers:
            handler.flush()

        line = json_file.read_text().strip().splitlines()[-1]
        data = json.loads(line)
        assert data["message"] == "Connected to 10.0.0.20:6053"
        assert data["context"] == {"elapsed_ms": 12.5}

    def test_human_file_output(self, tmp_path: Path, restore_package_logger: logging.Logger):
        """Test human-readable output can go to a file"""
        human_file = tmp_path / "client.log"
        logger = configure_logging(log_format="human", human_output=str(human_file), level=logging.INFO)

        logger.warning("Ping %d/%d failed", 1, 3)
        for handler in logger.handlers:
            handler.flush()

        assert "Ping 1/3 failed" in human_file.read_text()

    def test_get_logger_namespaces_names(self, restore_package_logger: logging.Logger):
        """Test loggers are placed under the package logger"""
        assert get_logger("tools").name == "esphome_native_client.tools"
        assert get_logger("esphome_native_client.client").name == "esphome_native_client.client"
        assert get_logger(PACKAGE_LOGGER) is restore_package_logger
