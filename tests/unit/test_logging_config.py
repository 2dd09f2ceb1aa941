"""
Unit tests for logging configuration.
"""

import logging

import pytest

from common.logging_config import CustomLogRecord, configure_logging
from config.timer_config import LoggingConfig


@pytest.fixture
def restore_logging():
    """Restore root logging state changed by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    factory = logging.getLogRecordFactory()
    timers_level = logging.getLogger("timers").level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging.setLogRecordFactory(factory)
    logging.getLogger("timers").setLevel(timers_level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_console_handler(self, restore_logging):
        configure_logging(LoggingConfig(log_level="debug"))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(type(h) is logging.StreamHandler for h in root.handlers)
        record = logging.getLogRecordFactory()(
            "timers", logging.INFO, "/src/timers/base.py", 1, "format check", None, None
        )
        output = root.handlers[0].format(record)
        assert "[INFO] [base] format check" in output

    def test_records_carry_module_name(self, restore_logging):
        configure_logging(LoggingConfig())

        record = logging.getLogRecordFactory()(
            "timers",
            logging.INFO,
            "/src/timers/timer_registry.py",
            1,
            "msg",
            None,
            None,
        )

        assert isinstance(record, CustomLogRecord)
        assert record.module_name == "timer_registry"

    def test_file_handler_writes_log_file(self, restore_logging, tmp_path):
        log_file = tmp_path / "logs" / "timers.log"

        configure_logging(
            LoggingConfig(log_file=str(log_file), disable_console_logging=True)
        )
        logging.getLogger("timers.test").warning("file handler check")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "file handler check" in log_file.read_text()
        assert not any(
            type(h) is logging.StreamHandler for h in logging.getLogger().handlers
        )

    def test_per_logger_levels(self, restore_logging):
        configure_logging(LoggingConfig(loggers={"timers": "warning"}))

        assert logging.getLogger("timers").level == logging.WARNING
