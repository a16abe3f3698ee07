"""Trade report command."""

import sys
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console

from tradestats.reporting import build_trade_report, display_trade_report
from tradestats.statistics import InvalidArgumentError, load_trades
from tradestats.statistics.grouping import TIMEFRAMES
from tradestats.system import LoggerFactory
from tradestats.system.config import reload_system_config

console = Console()


@click.command("report")
@click.option(
    "--file",
    "-f",
    "trades_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to trades file (.csv or .json)",
)
@click.option(
    "--timeframe",
    "-t",
    type=click.Choice(list(TIMEFRAMES)),
    help="Period breakdown: day, week or month (default from config)",
)
@click.option(
    "--risk-free-rate",
    type=float,
    help="Annual risk-free rate for the Sharpe ratio, e.g. 0.02",
)
@click.option(
    "--starting-equity",
    "-e",
    type=float,
    help="Account equity before the first trade (enables Sharpe ratio)",
)
@click.option(
    "--detail",
    "-d",
    type=click.Choice(["summary", "standard", "full"]),
    help="Report detail level",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to system config (default: config/system.yaml)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)
def report_command(
    trades_file: Path,
    timeframe: Optional[str],
    risk_free_rate: Optional[float],
    starting_equity: Optional[float],
    detail: Optional[str],
    config_file: Optional[Path],
    log_level: Optional[str],
):
    """
    Compute and display trade statistics from a trades file.

    CLI options override config file values without modifying files.

    \b
    Examples:
        # Standard report, daily breakdown
        tradestats report --file trades.csv

        # Monthly breakdown with Sharpe ratio on a $10,000 account
        tradestats report -f trades.csv -t month -e 10000

        # Everything, including weekday and hourly tables
        tradestats report -f trades.json --detail full
    """
    try:
        system_config = reload_system_config(config_file)

        if log_level:
            level = cast(Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], log_level.upper())
            system_config.logging.level = level
        LoggerFactory.configure(system_config.logging.to_logger_config())
        logger = LoggerFactory.get_logger()

        stats_config = system_config.statistics
        resolved_timeframe = timeframe or stats_config.default_timeframe
        resolved_rate = risk_free_rate if risk_free_rate is not None else stats_config.risk_free_rate
        resolved_equity = starting_equity if starting_equity is not None else stats_config.starting_equity
        resolved_detail = detail or system_config.report.detail_level
        logger.debug(
            "report.config_resolved",
            timeframe=resolved_timeframe,
            risk_free_rate=resolved_rate,
            starting_equity=resolved_equity,
            detail=resolved_detail,
        )

        console.rule("[bold blue]Trade Report[/bold blue]")
        console.print(f"  File: [yellow]{trades_file}[/yellow]")
        console.print(f"  Timeframe: [yellow]{resolved_timeframe}[/yellow]")

        trades = load_trades(trades_file)

        report = build_trade_report(
            trades,
            timeframe=resolved_timeframe,  # type: ignore[arg-type]
            risk_free_rate=resolved_rate,
            starting_equity=resolved_equity,
        )

        display_trade_report(
            report,
            detail_level=resolved_detail,  # type: ignore[arg-type]
            console=console,
            max_bucket_rows=system_config.report.max_bucket_rows,
        )

        logger.info(
            "report.completed",
            trades=report.stats.total_trades,
            timeframe=resolved_timeframe,
            periods=len(report.periods),
        )

        sys.exit(0)

    except (InvalidArgumentError, FileNotFoundError) as e:
        console.print(f"[bold red]✗ Report failed:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        console.print()
        console.print(f"[bold red]✗ Report failed:[/bold red] {e}")
        import traceback

        console.print()
        console.print("[dim]" + traceback.format_exc() + "[/dim]")
        sys.exit(1)
