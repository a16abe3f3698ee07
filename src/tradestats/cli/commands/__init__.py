"""CLI commands."""

from tradestats.cli.commands.profit import profit_command
from tradestats.cli.commands.report import report_command

__all__ = ["profit_command", "report_command"]
