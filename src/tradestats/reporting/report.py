"""Trade report assembly.

Combines the statistics engine outputs into a single TradeReport consumed by
the console formatters and the CLI.
"""

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from tradestats.statistics.grouping import (
    Timeframe,
    calculate_daily_pnl,
    calculate_hourly_stats,
    calculate_weekday_stats,
    group_by_timeframe,
)
from tradestats.statistics.metrics import (
    build_equity_curve,
    calculate_advanced_trade_stats,
    calculate_max_drawdown,
    calculate_returns,
    calculate_sharpe_ratio,
    calculate_win_rate,
)
from tradestats.statistics.models import AdvancedTradeStats, BucketStats, DailyPnL, DrawdownResult, TradeRecord


class PeriodSummary(BaseModel):
    """One day/week/month bucket of a timeframe breakdown."""

    model_config = ConfigDict(frozen=True)

    period: str
    trade_count: int
    total_pnl: float
    win_rate: float


class TradeReport(BaseModel):
    """
    Complete analytics for a set of trades.

    `sharpe_ratio` is None when no positive starting equity was given, since
    per-period returns are undefined on a curve that starts at zero.

    `drawdown` is measured on the equity curve that starts at
    `starting_equity` (index 0) followed by the equity after each trade, so
    index i is the equity after the i-th trade.
    """

    model_config = ConfigDict(frozen=True)

    timeframe: Timeframe
    risk_free_rate: float
    starting_equity: float
    stats: AdvancedTradeStats
    drawdown: DrawdownResult
    sharpe_ratio: float | None
    periods: list[PeriodSummary] = Field(default_factory=list)
    daily_pnl: list[DailyPnL] = Field(default_factory=list)
    weekday_stats: dict[str, BucketStats] = Field(default_factory=dict)
    hourly_stats: dict[int, BucketStats] = Field(default_factory=dict)


def build_trade_report(
    trades: Sequence[TradeRecord],
    timeframe: Timeframe = "day",
    risk_free_rate: float = 0.02,
    starting_equity: float = 0.0,
) -> TradeReport:
    """
    Compute every report section for trades.

    Args:
        trades: Closed trades in any order
        timeframe: Bucket size for the period breakdown
        risk_free_rate: Annual risk-free rate for the Sharpe ratio
        starting_equity: Account equity before the first trade

    Returns:
        TradeReport. Periods are listed in chronological order.

    Raises:
        InvalidTimeframeError: If timeframe is not day/week/month
    """
    grouped = group_by_timeframe(trades, timeframe)
    periods = [
        PeriodSummary(
            period=key,
            trade_count=len(bucket),
            total_pnl=sum((t.pnl for t in bucket), 0.0),
            win_rate=calculate_win_rate(bucket),
        )
        for key, bucket in sorted(grouped.items())
    ]

    daily_pnl = calculate_daily_pnl(trades)

    sharpe_ratio: float | None = None
    if starting_equity > 0:
        daily_equity = [starting_equity] + [starting_equity + day.cumulative for day in daily_pnl]
        sharpe_ratio = calculate_sharpe_ratio(calculate_returns(daily_equity), risk_free_rate)

    return TradeReport(
        timeframe=timeframe,
        risk_free_rate=risk_free_rate,
        starting_equity=starting_equity,
        stats=calculate_advanced_trade_stats(trades),
        drawdown=calculate_max_drawdown([starting_equity] + build_equity_curve(trades, starting_equity)),
        sharpe_ratio=sharpe_ratio,
        periods=periods,
        daily_pnl=daily_pnl,
        weekday_stats=calculate_weekday_stats(trades),
        hourly_stats=calculate_hourly_stats(trades),
    )
