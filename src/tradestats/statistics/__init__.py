"""Trading statistics engine.

Pure, deterministic aggregation functions over closed trades:

1. **Models** (`models.py`): Pydantic data structures
   - TradeRecord: Closed trade (pnl + trade_date, other fields optional)
   - DrawdownResult, DailyPnL, BucketStats: Engine results
   - StreakStats, LargestWinLoss, TradeMetrics, AdvancedTradeStats

2. **Metrics** (`metrics.py`): Trade-level and equity-curve functions
   - Trade stats: win_rate, profit_factor, expectancy, average win/loss
   - Risk-adjusted: Sharpe ratio (population std, 252 periods)
   - Equity curve: max_drawdown, build_equity_curve, returns
   - Advanced: streaks, largest win/loss, recovery/payoff/win-loss ratios

3. **Grouping** (`grouping.py`): Calendar bucketing
   - group_by_timeframe (day/week/month), daily PnL with cumulative total
   - Weekday (7 buckets) and hourly (24 buckets) statistics

4. **Loaders** (`loaders.py`): CSV/JSON trade files → TradeRecord

Degenerate inputs return sentinels (0 or math.inf) instead of raising. The
only error a metric raises is InvalidTimeframeError from group_by_timeframe.

Usage:
    >>> from tradestats.statistics import calculate_profit_factor, group_by_timeframe
    >>> calculate_profit_factor(trades)
    3.75
    >>> group_by_timeframe(trades, "week")
    {'2024-01-07': [...], '2024-01-14': [...]}
"""

from tradestats.statistics.errors import InvalidArgumentError, InvalidTimeframeError, InvalidTradeError
from tradestats.statistics.grouping import (
    HOURS,
    WEEKDAYS,
    Timeframe,
    calculate_daily_pnl,
    calculate_hourly_stats,
    calculate_weekday_stats,
    group_by_timeframe,
)
from tradestats.statistics.loaders import load_trades
from tradestats.statistics.metrics import (
    TRADING_DAYS_PER_YEAR,
    build_equity_curve,
    calculate_advanced_trade_stats,
    calculate_average_loss,
    calculate_average_win,
    calculate_consecutive_streaks,
    calculate_expectancy,
    calculate_largest_win_loss,
    calculate_max_drawdown,
    calculate_payoff_ratio,
    calculate_profit_factor,
    calculate_recovery_factor,
    calculate_returns,
    calculate_sharpe_ratio,
    calculate_trade_metrics,
    calculate_trade_profit,
    calculate_win_loss_ratio,
    calculate_win_rate,
)
from tradestats.statistics.models import (
    AdvancedTradeStats,
    BucketStats,
    DailyPnL,
    DrawdownResult,
    LargestWinLoss,
    StreakStats,
    TradeMetrics,
    TradeProfit,
    TradeRecord,
)

__all__ = [
    # Errors
    "InvalidArgumentError",
    "InvalidTimeframeError",
    "InvalidTradeError",
    # Models
    "TradeRecord",
    "TradeProfit",
    "DrawdownResult",
    "DailyPnL",
    "BucketStats",
    "StreakStats",
    "LargestWinLoss",
    "TradeMetrics",
    "AdvancedTradeStats",
    # Metrics
    "TRADING_DAYS_PER_YEAR",
    "calculate_win_rate",
    "calculate_profit_factor",
    "calculate_expectancy",
    "calculate_average_win",
    "calculate_average_loss",
    "calculate_sharpe_ratio",
    "calculate_max_drawdown",
    "build_equity_curve",
    "calculate_returns",
    "calculate_consecutive_streaks",
    "calculate_largest_win_loss",
    "calculate_recovery_factor",
    "calculate_payoff_ratio",
    "calculate_win_loss_ratio",
    "calculate_trade_metrics",
    "calculate_advanced_trade_stats",
    "calculate_trade_profit",
    # Grouping
    "Timeframe",
    "WEEKDAYS",
    "HOURS",
    "group_by_timeframe",
    "calculate_daily_pnl",
    "calculate_weekday_stats",
    "calculate_hourly_stats",
    # Loading
    "load_trades",
]
