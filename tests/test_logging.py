"""Tests for rolecall.logging module."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest

from rolecall import LogLevel, RolecallConfig, RolecallFormatter, safe_preview, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSafePreview:
    """Tests for safe_preview function."""

    def test_none_value(self) -> None:
        assert safe_preview(None) == ""

    def test_string_with_whitespace(self) -> None:
        assert safe_preview("hello\n\tworld  test") == "hello world test"

    def test_role_tuple(self) -> None:
        assert safe_preview(("admin", "user")) == '["admin", "user"]'

    def test_truncation(self) -> None:
        result = safe_preview("a" * 300, limit=100)
        assert len(result) == 100
        assert result.endswith("…")


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_with_config(self) -> None:
        setup_logging(config=RolecallConfig(log_level=LogLevel.DEBUG), json_format=False)
        assert logging.getLogger().level == logging.DEBUG

    @patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True)
    def test_setup_with_env(self) -> None:
        setup_logging(json_format=False)
        assert logging.getLogger().level == logging.WARNING

    def test_service_logger_level(self) -> None:
        config = RolecallConfig(log_level=LogLevel.ERROR, service_name="billing")
        setup_logging(config=config)
        assert logging.getLogger("billing").level == logging.ERROR

    def test_single_console_handler(self) -> None:
        """Repeated setup leaves exactly one handler on the root logger."""
        setup_logging(config=RolecallConfig())
        setup_logging(config=RolecallConfig())

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, RolecallFormatter)

    def test_lowercase_level_from_config(self) -> None:
        setup_logging(config=RolecallConfig(log_level="critical"))
        assert logging.getLogger().level == logging.CRITICAL

    def test_json_format(self, capsys: pytest.CaptureFixture) -> None:
        setup_logging(config=RolecallConfig(log_level=LogLevel.INFO), json_format=True)

        logging.getLogger("test").info("Test message", extra={"roles": ("admin",)})

        data = json.loads(capsys.readouterr().err.strip())
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["logger"] == "test"
        assert data["roles"] == '["admin"]'

    def test_json_from_config(self, capsys: pytest.CaptureFixture) -> None:
        setup_logging(config=RolecallConfig(log_json=True))

        logging.getLogger("test").warning("Configured")

        assert capsys.readouterr().err.strip().startswith("{")

    def test_plain_format(self, capsys: pytest.CaptureFixture) -> None:
        setup_logging(config=RolecallConfig(log_level=LogLevel.INFO), json_format=False)

        logging.getLogger("test").info("Test message")

        output = capsys.readouterr().err.strip()
        assert "INFO" in output
        assert "Test message" in output
        assert not output.startswith("{")


class TestRolecallFormatter:
    """Tests for RolecallFormatter."""

    def test_json_format_with_extra(self) -> None:
        record = make_record()
        record.role_count = 3

        data = json.loads(RolecallFormatter(json_format=True).format(record))

        assert data["level"] == "INFO"
        assert data["role_count"] == "3"

    def test_plain_format_with_extra(self) -> None:
        record = make_record()
        record.role_count = 3

        result = RolecallFormatter(json_format=False).format(record)

        assert "INFO" in result
        assert "Test message" in result
        assert "role_count=3" in result

    def test_exception_included(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(RolecallFormatter(json_format=True).format(record))
        assert "ValueError: boom" in data["exception"]
