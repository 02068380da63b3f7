"""Unit tests for ringclock._logging — JSON formatter and config.

Test Techniques Used:
    - Specification-based Testing: JsonFormatter output schema
    - State Inspection: Root logger handler/level after configure
    - Fixture Isolation: Save/restore root logger state
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from ringclock._logging import JsonFormatter, configure_logging
from ringclock._settings import LoggingSettings


def _make_record(
    message: str = "hello", level: int = logging.INFO
) -> logging.LogRecord:
    return logging.LogRecord(
        name="ringclock._face",
        level=level,
        pathname="_face.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestJsonFormatter:
    """JsonFormatter output schema.

    Technique: Specification-based Testing.
    """

    def test_has_required_fields(self) -> None:
        result = json.loads(JsonFormatter(service="ringclock").format(_make_record()))
        assert {"timestamp", "level", "logger", "message", "service"} <= result.keys()
        assert result["logger"] == "ringclock._face"
        assert result["level"] == "INFO"

    def test_timestamp_is_utc_iso8601(self) -> None:
        result = json.loads(JsonFormatter(service="ringclock").format(_make_record()))
        assert datetime.fromisoformat(result["timestamp"]).tzinfo == UTC

    def test_message_args_are_interpolated(self) -> None:
        record = _make_record("Rendered %02d:%02d")
        record.args = (9, 5)
        result = json.loads(JsonFormatter(service="ringclock").format(record))
        assert result["message"] == "Rendered 09:05"

    def test_version_included_when_set(self) -> None:
        fmt = JsonFormatter(service="ringclock", version="0.1.0")
        assert json.loads(fmt.format(_make_record()))["version"] == "0.1.0"

    def test_version_omitted_when_empty(self) -> None:
        fmt = JsonFormatter(service="ringclock")
        assert "version" not in json.loads(fmt.format(_make_record()))

    def test_exception_included_when_present(self) -> None:
        fmt = JsonFormatter(service="ringclock")
        record = _make_record()
        try:
            raise OSError("disk full")
        except OSError:
            record.exc_info = sys.exc_info()
        result = json.loads(fmt.format(record))
        assert "OSError: disk full" in result["exception"]

    def test_stack_info_included_when_present(self) -> None:
        record = _make_record()
        record.stack_info = "Stack trace here"
        result = json.loads(JsonFormatter(service="ringclock").format(record))
        assert "Stack trace" in result["stack_info"]


class TestConfigureLogging:
    """configure_logging() root logger setup.

    Technique: State Inspection.
    """

    @pytest.mark.usefixtures("restore_root_logger")
    def test_default_is_json_on_stderr(self) -> None:
        configure_logging(LoggingSettings(), service="ringclock")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, JsonFormatter)
        assert root.level == logging.INFO

    @pytest.mark.usefixtures("restore_root_logger")
    def test_text_mode_sets_standard_formatter(self) -> None:
        configure_logging(LoggingSettings(format="text"), service="ringclock")
        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, logging.Formatter)
        assert not isinstance(formatter, JsonFormatter)

    @pytest.mark.usefixtures("restore_root_logger")
    def test_sets_root_logger_level(self) -> None:
        configure_logging(LoggingSettings(level="DEBUG"), service="ringclock")
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.usefixtures("restore_root_logger")
    def test_clears_existing_handlers(self) -> None:
        root = logging.getLogger()
        dummy = logging.StreamHandler()
        root.addHandler(dummy)

        configure_logging(LoggingSettings(), service="ringclock")

        assert dummy not in root.handlers

    @pytest.mark.usefixtures("restore_root_logger")
    def test_file_handler_added_when_file_set(self, tmp_path: Path) -> None:
        settings = LoggingSettings(
            file=str(tmp_path / "ringclock.log"),
            max_file_size_mb=2,
            backup_count=1,
        )
        configure_logging(settings, service="ringclock")

        rotating = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, RotatingFileHandler)
        ]
        assert len(rotating) == 1
        assert rotating[0].maxBytes == 2 * 1024 * 1024
        assert rotating[0].backupCount == 1

    @pytest.mark.usefixtures("restore_root_logger")
    def test_file_receives_json_lines(self, tmp_path: Path) -> None:
        log_file = tmp_path / "ringclock.log"
        configure_logging(
            LoggingSettings(format="json", file=str(log_file)),
            service="ringclock",
            version="0.1.0",
        )

        logging.getLogger("ringclock.test").warning("Connectivity lost")
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert entry["message"] == "Connectivity lost"
        assert entry["service"] == "ringclock"
        assert entry["version"] == "0.1.0"
