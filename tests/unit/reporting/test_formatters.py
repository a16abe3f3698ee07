"""Unit tests for reporting formatters module.

Tests cover:
- Ratio, percentage and currency formatting (including infinity)
- Period table truncation
- Main display function with different detail levels
"""

import math
from datetime import datetime
from io import StringIO

import pytest
from rich.console import Console

from tradestats.reporting import build_trade_report, display_trade_report, format_ratio
from tradestats.reporting.formatters import _create_period_table, _format_currency, _format_pct, _get_color
from tradestats.reporting.report import PeriodSummary
from tradestats.statistics import TradeRecord


@pytest.fixture
def console():
    """Fixture providing a Console that writes to memory."""
    return Console(file=StringIO(), width=120)


@pytest.fixture
def report(mixed_trades):
    """Fixture providing a report over the shared mixed journal."""
    return build_trade_report(mixed_trades)


def _output(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]


class TestFormatHelpers:
    """Test formatting helper functions."""

    def test_format_ratio(self):
        """Test finite ratios use fixed precision."""
        assert format_ratio(3.756) == "3.76"
        assert format_ratio(1.5, precision=1) == "1.5"

    def test_format_ratio_infinite(self):
        """Test infinity renders as a symbol."""
        assert format_ratio(math.inf) == "∞"
        assert format_ratio(-math.inf) == "-∞"

    def test_format_ratio_undefined(self):
        """Test None and NaN render as N/A."""
        assert format_ratio(None) == "N/A"
        assert format_ratio(math.nan) == "N/A"

    def test_format_pct(self):
        """Test fractions are shown as percentages."""
        assert _format_pct(0.6) == "60.00%"

    def test_format_currency(self):
        """Test currency keeps sign before the symbol."""
        assert _format_currency(1234.5) == "$1,234.50"
        assert _format_currency(-50) == "-$50.00"

    def test_get_color(self):
        """Test sign-based colors."""
        assert _get_color(1) == "green"
        assert _get_color(-1) == "red"
        assert _get_color(0) == "white"


class TestPeriodTable:
    """Test _create_period_table."""

    def test_empty_returns_none(self):
        """Test no table without periods."""
        assert _create_period_table([], "Daily", 31) is None

    def test_keeps_most_recent_rows(self):
        """Test row limit keeps the latest periods."""
        periods = [
            PeriodSummary(period=f"2024-01-0{i}", trade_count=1, total_pnl=10.0, win_rate=1.0) for i in range(1, 6)
        ]

        table = _create_period_table(periods, "Daily", 2)

        assert table is not None
        assert table.row_count == 2

    def test_zero_limit_shows_all(self):
        """Test a limit of zero disables truncation."""
        periods = [PeriodSummary(period="2024-01", trade_count=3, total_pnl=5.0, win_rate=0.5)] * 4

        table = _create_period_table(periods, "Monthly", 0)

        assert table is not None
        assert table.row_count == 4


class TestDisplayTradeReport:
    """Test display_trade_report."""

    def test_summary_level(self, report, console):
        """Test summary shows key metrics only."""
        display_trade_report(report, detail_level="summary", console=console)

        output = _output(console)
        assert "Trade Summary" in output
        assert "60.00%" in output
        assert "Trade Statistics" not in output
        assert "Daily P&L" not in output

    def test_standard_level(self, report, console):
        """Test standard adds trade stats, risk and periods."""
        display_trade_report(report, console=console)

        output = _output(console)
        assert "Trade Statistics" in output
        assert "Max Drawdown" in output
        assert "trade 1 → trade 2" in output
        assert "no starting equity" in output
        assert "Daily P&L" in output
        assert "2024-01-03" in output
        assert "By Weekday" not in output

    def test_drawdown_from_start(self, console):
        """Test a drawdown peaking at the starting equity is labelled as such."""
        trades = [
            TradeRecord(pnl=-500, trade_date=datetime(2024, 1, 1, 10, 0)),
            TradeRecord(pnl=100, trade_date=datetime(2024, 1, 2, 10, 0)),
        ]
        report = build_trade_report(trades, starting_equity=10000)

        display_trade_report(report, console=console)

        output = _output(console)
        assert "start → trade 1" in output
        assert "5.00%" in output

    def test_full_level(self, report, console):
        """Test full adds weekday and hourly breakdowns."""
        display_trade_report(report, detail_level="full", console=console)

        output = _output(console)
        assert "By Weekday" in output
        assert "Saturday" in output
        assert "By Hour" in output
        assert "09:00" in output

    def test_infinite_profit_factor(self, console):
        """Test journals without losses show an infinite profit factor."""
        trades = [TradeRecord(pnl=10, trade_date=datetime(2024, 1, 1, 10))]

        display_trade_report(build_trade_report(trades), console=console)

        assert "∞" in _output(console)

    def test_empty_report(self, console):
        """Test an empty journal still renders."""
        display_trade_report(build_trade_report([]), detail_level="full", console=console)

        output = _output(console)
        assert "0 trades" in output
        assert "Trade Statistics" not in output
