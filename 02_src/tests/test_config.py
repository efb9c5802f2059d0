"""Tests for settings helpers and the JSON log formatter."""

import json
import logging
import sys

import pytest

from topicflow.config import (
    DEFAULT_LOG_PATH,
    PROJECT_ROOT,
    resolve_flag,
    resolve_float,
    resolve_int,
    resolve_log_path,
)
from topicflow.logging_config import JSONFormatter, build_logging_config


class TestResolvers:
    """Tests for environment value parsing."""

    def test_log_path(self, tmp_path):
        """Test default, relative and absolute LOG_FILE values."""
        assert resolve_log_path(None) == DEFAULT_LOG_PATH
        assert resolve_log_path("logs/x.log") == PROJECT_ROOT / "logs" / "x.log"
        assert resolve_log_path(str(tmp_path / "a.log")) == tmp_path / "a.log"

    def test_int(self):
        """Test integer settings."""
        assert resolve_int(None, 100) == 100
        assert resolve_int("  ", 100) == 100
        assert resolve_int("7", 100) == 7
        with pytest.raises(ValueError):
            resolve_int("0", 100)
        with pytest.raises(ValueError):
            resolve_int("many", 100)

    def test_float(self):
        """Test float settings."""
        assert resolve_float(None, 2.0) == 2.0
        assert resolve_float("0.5", 2.0) == 0.5
        with pytest.raises(ValueError):
            resolve_float("-1", 2.0)

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_flag_true(self, value):
        assert resolve_flag(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "off", "nope"])
    def test_flag_false(self, value):
        assert resolve_flag(value, default=True) is False

    def test_flag_default(self):
        assert resolve_flag(None) is False
        assert resolve_flag("", default=True) is True


class TestJSONFormatter:
    """Tests for structured log records."""

    def make_record(self, exc_info=None) -> logging.LogRecord:
        return logging.LogRecord(
            name="topicflow.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=42,
            msg="agent %s failed",
            args=("IncAgent",),
            exc_info=exc_info,
        )

    def test_fields(self):
        """Test the JSON fields of a record."""
        data = json.loads(JSONFormatter().format(self.make_record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "topicflow.test"
        assert data["message"] == "agent IncAgent failed"
        assert data["line"] == 42
        assert "thread" in data
        assert "exception" not in data

    def test_exception_and_context(self):
        """Test exception text and extra context."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = self.make_record(exc_info=sys.exc_info())
        record.context = {"topic": "A"}

        data = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]
        assert data["context"] == {"topic": "A"}


class TestLoggingConfig:
    """Tests for the dictConfig mapping."""

    def test_file_and_console(self, tmp_path):
        """Test default handlers and quieted third-party loggers."""
        config = build_logging_config("debug", str(tmp_path / "app.log"))

        assert config["root"] == {"level": "DEBUG", "handlers": ["file", "console"]}
        assert config["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
        assert config["loggers"]["httpx"] == {"level": "WARNING"}

    def test_file_only(self, tmp_path):
        """Test disabling the console handler."""
        config = build_logging_config("INFO", str(tmp_path / "app.log"), console=False)
        assert config["root"]["handlers"] == ["file"]
        assert "console" not in config["handlers"]
