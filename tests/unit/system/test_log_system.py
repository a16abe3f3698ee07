"""Tests for centralized logging configuration."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from tradestats.system import LoggerFactory, LoggingConfig
from tradestats.system.log_system import _render_console


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test."""
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()


def _read_json_lines(path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


class TestConfigure:
    """Test LoggerFactory.configure()."""

    def test_auto_configure_with_defaults(self):
        """Test first get_logger() installs the default console handler at INFO."""
        logger = LoggerFactory.get_logger()

        assert hasattr(logger, "info")
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO
        assert logging.getLogger().level == logging.INFO

    def test_console_writes_to_stderr(self):
        """Test console logs stay off stdout."""
        LoggerFactory.configure()

        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_json_console_format(self, capsys):
        """Test json format renders one object per event."""
        LoggerFactory.configure(LoggingConfig(format="json"))

        LoggerFactory.get_logger("tradestats.test").info("report.completed", trades=5)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "report.completed"
        assert record["trades"] == 5

    def test_reset_clears_configuration(self):
        """Test that reset removes handlers and levels."""
        LoggerFactory.configure(LoggingConfig(level="DEBUG"))

        LoggerFactory.reset()

        assert logging.getLogger().handlers == []
        assert logging.getLogger().level == logging.NOTSET

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_log_levels(self, level):
        """Test the console handler threshold follows the configured level."""
        LoggerFactory.configure(LoggingConfig(level=level))

        (handler,) = logging.getLogger().handlers
        assert handler.level == getattr(logging, level)


class TestFileLogging:
    """Test file output."""

    def test_file_logs_are_json_lines(self, tmp_path):
        """Test file output is machine readable JSON."""
        log_file = tmp_path / "tradestats.jsonl"
        LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_rotation=False))

        logger = LoggerFactory.get_logger()
        logger.error("loaders.invalid_row", path="trades.csv", row=2)

        record = _read_json_lines(log_file)[0]
        assert record["event"] == "loaders.invalid_row"
        assert record["row"] == 2
        assert record["level"].upper() == "ERROR"
        # Kept apart from trade_date context fields
        assert "log_timestamp" in record

    def test_default_file_path(self, tmp_path, monkeypatch):
        """Test enabling file output without a path uses logs/tradestats.log."""
        monkeypatch.chdir(tmp_path)

        LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=None))

        assert (tmp_path / "logs" / "tradestats.log").exists()

    def test_creates_parent_directories(self, tmp_path):
        """Test that file logging creates parent directories."""
        log_file = tmp_path / "logs" / "nested" / "tradestats.log"
        LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_level="INFO"))

        LoggerFactory.get_logger().info("report.completed", trades=3)

        assert log_file.exists()

    def test_rotating_file_handler(self, tmp_path):
        """Test rotation settings reach the handler."""
        log_file = tmp_path / "rotating.log"
        LoggerFactory.configure(
            LoggingConfig(enable_file=True, file_path=log_file, max_file_size_mb=1, backup_count=5)
        )

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]

        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1024 * 1024
        assert handlers[0].backupCount == 5

    def test_file_level_independent_from_console_level(self, tmp_path):
        """Test file threshold filters separately from the console."""
        log_file = tmp_path / "split.log"
        LoggerFactory.configure(
            LoggingConfig(level="ERROR", enable_file=True, file_path=log_file, file_level="INFO", file_rotation=False)
        )

        logger = LoggerFactory.get_logger("tradestats.test")
        logger.debug("report.config_resolved", timeframe="week")
        logger.info("loaders.trades_loaded", path="trades.csv", count=120)

        events = [entry["event"] for entry in _read_json_lines(log_file)]
        assert events == ["loaders.trades_loaded"]


class TestConsoleRenderer:
    """Test the console renderer."""

    def test_renders_event_context_and_location(self):
        """Test rendered line carries timestamp, level, event and sorted context."""
        renderer = _render_console

        line = renderer(
            None,
            "info",
            {
                "log_timestamp": "240101-093000.00",
                "level": "warning",
                "event": "loaders.trades_loaded",
                "count": 3,
                "path": "trades.csv",
                "filename": "/src/tradestats/statistics/loaders.py",
                "lineno": 110,
            },
        )

        assert line.startswith("240101-093000.00")
        assert "warning" in line
        assert "loaders.trades_loaded" in line
        assert line.index("count=3") < line.index("path=trades.csv")
        assert "loaders:110" in line
