"""Trade report assembly and console display."""

from tradestats.reporting.formatters import display_trade_report, format_ratio
from tradestats.reporting.report import PeriodSummary, TradeReport, build_trade_report

__all__ = [
    "PeriodSummary",
    "TradeReport",
    "build_trade_report",
    "display_trade_report",
    "format_ratio",
]
