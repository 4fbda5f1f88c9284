"""Test utils module functionality."""

import logging
from datetime import date

import pytest

from wordtrail.config import load_settings
from wordtrail.utils.dates import (
    days_between,
    parse_date_key,
    recent_days,
    to_date_key,
    validate_date_key,
)
from wordtrail.utils.logger import get_logger, preview_text, setup_logging
from wordtrail.utils.mixins import LoggerMixin


@pytest.mark.usefixtures("reset_logging")
class TestLogger:
    """Test logging functionality."""

    def test_setup_logging_creates_log_file(self, tmp_path):
        """Test log file is created under the given directory."""
        setup_logging(load_settings(), log_dir=tmp_path / "logs")

        test_message = "logging format check"
        logging.getLogger("format-check").info(test_message)

        root_logger = logging.getLogger()
        file_handlers = [
            handler
            for handler in root_logger.handlers
            if isinstance(handler, logging.FileHandler)
        ]
        assert file_handlers, "no FileHandler configured"
        for handler in file_handlers:
            handler.flush()

        log_file = tmp_path / "logs" / "wordtrail.log"
        assert log_file.exists()
        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert lines[-1].endswith(test_message)

    def test_setup_logging_defaults_to_data_directory(self):
        settings = load_settings()
        setup_logging(settings)

        assert (settings.data_path.parent / "logs").is_dir()

    def test_json_format(self, tmp_path):
        """Test structlog events are rendered as JSON."""
        setup_logging(load_settings(log_format="json"), log_dir=tmp_path)

        get_logger("json-check").info("structured event", words=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        last_line = (tmp_path / "wordtrail.log").read_text(encoding="utf-8").splitlines()[-1]
        assert '"event": "structured event"' in last_line
        assert '"words": 3' in last_line

    def test_get_logger_returns_logger(self):
        """Test get_logger returns a logger instance."""
        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")


class TestLoggerMixin:
    """Test LoggerMixin functionality."""

    def test_logger_mixin_provides_logger(self):
        class Component(LoggerMixin):
            pass

        logger = Component().logger
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")


class TestPreviewText:
    def test_short_text_flattened(self):
        assert preview_text("line one\n\nline two") == "line one line two"

    def test_long_text_truncated(self):
        assert preview_text("x" * 50, max_length=10) == "x" * 10 + "..."


class TestDates:
    """Day key helpers"""

    def test_round_trip(self):
        assert to_date_key(date(2024, 3, 9)) == "2024-03-09"
        assert parse_date_key("2024-03-09") == date(2024, 3, 9)

    @pytest.mark.parametrize("key", ["2024-3-9", "2024/03/09", "2024-02-30", "", None])
    def test_invalid_keys(self, key):
        valid, message = validate_date_key(key)
        assert valid is False
        assert message

    def test_valid_key(self):
        assert validate_date_key("2024-02-29") == (True, None)

    def test_days_between(self):
        assert days_between("2024-02-28", "2024-03-01") == 2
        assert days_between("2024-01-02", "2024-01-01") == -1

    def test_recent_days_oldest_first(self):
        days = recent_days(date(2024, 1, 2), 3)
        assert days == [date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 2)]
