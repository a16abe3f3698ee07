"""Rich console formatters for trade reports.

Provides terminal display of trade statistics with tables, colors, and
formatting using the Rich library. Infinite ratios render as "∞" and
undefined values as "N/A".
"""

import math
from typing import Any, Literal, Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tradestats.reporting.report import PeriodSummary, TradeReport
from tradestats.statistics.models import AdvancedTradeStats, BucketStats

DetailLevel = Literal["summary", "standard", "full"]


def format_ratio(value: float | None, precision: int = 2) -> str:
    """Format a ratio that may be infinite or undefined."""
    if value is None or math.isnan(value):
        return "N/A"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    return f"{value:.{precision}f}"


def _format_pct(value: float, precision: int = 2) -> str:
    """Format a [0, 1] fraction as a percentage."""
    return f"{value * 100:.{precision}f}%"


def _format_currency(value: float, precision: int = 2) -> str:
    """Format currency value."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{precision}f}"


def _get_color(value: float) -> str:
    """Get color based on positive/negative value."""
    if value > 0:
        return "green"
    elif value < 0:
        return "red"
    return "white"


def _colored(value: float, text: str) -> str:
    color = _get_color(value)
    return f"[{color}]{text}[/{color}]"


def _create_summary_table(stats: AdvancedTradeStats) -> Table:
    """Create summary metrics table."""
    table = Table(title="📊 Trade Summary", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Trades", f"{stats.total_trades:,}")
    table.add_row("Total P&L", _colored(stats.total_pnl, _format_currency(stats.total_pnl)))

    win_rate_color = "green" if stats.win_rate > 0.5 else "yellow" if stats.win_rate > 0.4 else "red"
    table.add_row("Win Rate", f"[{win_rate_color}]{_format_pct(stats.win_rate)}[/{win_rate_color}]")

    pf_color = "green" if stats.profit_factor > 2.0 else "yellow" if stats.profit_factor > 1.0 else "red"
    table.add_row("Profit Factor", f"[{pf_color}]{format_ratio(stats.profit_factor)}[/{pf_color}]")
    table.add_row("Expectancy", _colored(stats.expectancy, _format_currency(stats.expectancy)))

    return table


def _create_trade_stats_table(stats: AdvancedTradeStats) -> Table:
    """Create detailed trade statistics table."""
    table = Table(title="💼 Trade Statistics", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Winning Trades", f"[green]{stats.winning_trades:,}[/green]")
    table.add_row("Losing Trades", f"[red]{stats.losing_trades:,}[/red]")
    table.add_row("Break-even Trades", f"{stats.breakeven_trades:,}")
    table.add_row("", "")  # Spacer
    table.add_row("Gross Profit", f"[green]{_format_currency(stats.gross_profit)}[/green]")
    table.add_row("Gross Loss", f"[red]{_format_currency(stats.gross_loss)}[/red]")
    table.add_row("Avg Win", f"[green]{_format_currency(stats.avg_win)}[/green]")
    table.add_row("Avg Loss", f"[red]{_format_currency(stats.avg_loss)}[/red]")
    table.add_row("Largest Win", f"[green]{_format_currency(stats.largest_win)}[/green]")
    table.add_row("Largest Loss", f"[red]{_format_currency(stats.largest_loss)}[/red]")
    table.add_row("", "")
    table.add_row("Payoff Ratio", format_ratio(stats.payoff_ratio))
    table.add_row("Win/Loss Ratio", format_ratio(stats.win_loss_ratio))
    table.add_row("Recovery Factor", format_ratio(stats.recovery_factor))
    table.add_row("", "")
    table.add_row("Max Consecutive Wins", f"{stats.max_consecutive_wins:,}")
    table.add_row("Max Consecutive Losses", f"{stats.max_consecutive_losses:,}")
    table.add_row("Current Streak", f"{stats.current_streak} ({stats.current_streak_type})")

    return table


def _create_risk_table(report: TradeReport) -> Table:
    """Create drawdown and risk-adjusted return table."""
    table = Table(title="⚠️  Risk", show_header=False, box=None, padding=(0, 2))

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    drawdown = report.drawdown
    table.add_row("Max Drawdown", f"[red]{_format_currency(drawdown.max_drawdown)}[/red]")
    table.add_row("Max Drawdown %", f"[red]{drawdown.max_drawdown_pct:.2f}%[/red]")
    if drawdown.start_index >= 0:
        # Index 0 is the starting equity, index i the equity after trade i
        peak = "start" if drawdown.start_index == 0 else f"trade {drawdown.start_index}"
        table.add_row("Drawdown Span", f"{peak} → trade {drawdown.end_index}")
    else:
        table.add_row("Drawdown Span", "[dim]none[/dim]")

    sharpe = report.sharpe_ratio
    if sharpe is None:
        table.add_row("Sharpe Ratio", "[dim]N/A (no starting equity)[/dim]")
    else:
        sharpe_color = "green" if sharpe > 1.0 else "yellow" if sharpe > 0 else "red"
        table.add_row("Sharpe Ratio", f"[{sharpe_color}]{format_ratio(sharpe)}[/{sharpe_color}]")
    table.add_row("Risk-Free Rate", _format_pct(report.risk_free_rate))

    return table


def _create_period_table(periods: list[PeriodSummary], title: str, max_rows: int) -> Table | None:
    """Create period breakdown table (daily/weekly/monthly), most recent rows last."""
    if not periods:
        return None

    shown = periods[-max_rows:] if max_rows > 0 else periods

    table = Table(title=title, box=None, padding=(0, 1))

    table.add_column("Period", style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for period in shown:
        table.add_row(
            period.period,
            f"{period.trade_count:,}",
            _colored(period.total_pnl, _format_currency(period.total_pnl)),
            _format_pct(period.win_rate),
        )

    return table


def _create_bucket_table(buckets: Mapping[Any, BucketStats], title: str, label: str, only_active: bool) -> Table:
    """Create weekday or hourly breakdown table."""
    table = Table(title=title, box=None, padding=(0, 1))

    table.add_column(label, style="cyan")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for key, stats in buckets.items():
        if only_active and stats.trade_count == 0:
            continue
        table.add_row(
            f"{key:02d}:00" if isinstance(key, int) else str(key),
            f"{stats.trade_count:,}",
            _colored(stats.total_pnl, _format_currency(stats.total_pnl)),
            _colored(stats.avg_pnl, _format_currency(stats.avg_pnl)),
            _format_pct(stats.win_rate) if stats.trade_count else "-",
        )

    return table


_PERIOD_TITLES = {
    "day": "📅 Daily P&L",
    "week": "📅 Weekly P&L",
    "month": "📅 Monthly P&L",
}


def display_trade_report(
    report: TradeReport,
    detail_level: DetailLevel = "standard",
    console: Console | None = None,
    max_bucket_rows: int = 31,
) -> None:
    """
    Display a trade report in Rich-formatted console output.

    Args:
        report: Computed trade report
        detail_level: Level of detail to display:
            - "summary": Key metrics only
            - "standard": Summary + trade stats + risk + period breakdown
            - "full": Everything including weekday and hourly breakdowns
        console: Rich Console instance (creates new if None)
        max_bucket_rows: Most recent period rows to show (0 = all)
    """
    if console is None:
        console = Console()

    console.print()

    console.print(_create_summary_table(report.stats))
    console.print()

    if detail_level in ["standard", "full"]:
        if report.stats.total_trades > 0:
            console.print(_create_trade_stats_table(report.stats))
            console.print()

        console.print(_create_risk_table(report))
        console.print()

        table = _create_period_table(report.periods, _PERIOD_TITLES[report.timeframe], max_bucket_rows)
        if table:
            console.print(table)
            console.print()

    if detail_level == "full":
        console.print(_create_bucket_table(report.weekday_stats, "🗓️  By Weekday", "Weekday", only_active=False))
        console.print()
        console.print(_create_bucket_table(report.hourly_stats, "🕐 By Hour", "Hour", only_active=True))
        console.print()

    total_pnl = report.stats.total_pnl
    summary_text = Text()
    summary_text.append("🏁 Journal: ", style="bold")
    summary_text.append(f"{report.stats.total_trades:,} trades", style="bold cyan")
    summary_text.append(f" ({_format_currency(total_pnl)})", style=f"bold {_get_color(total_pnl)}")

    console.print(Panel(summary_text, border_style="green" if total_pnl > 0 else "red"))
    console.print()
