"""Trade statistics calculation functions.

Pure functions for calculating performance statistics from closed trades,
equity curves and return series. All functions are stateless and testable.

Philosophy:
- Pure functions: same inputs always produce same outputs
- No side effects: inputs are never mutated or reordered in place
- Degenerate inputs return defined sentinels (0 or math.inf), never raise
- Values are not rounded unless stated (average loss is the one exception)

Usage:
    >>> from tradestats.statistics import metrics
    >>> trades = [TradeRecord(pnl=100, trade_date=...), TradeRecord(pnl=-50, trade_date=...)]
    >>> metrics.calculate_win_rate(trades)
    0.5
    >>> metrics.calculate_sharpe_ratio([0.01, -0.005, 0.02])
    12.75...
"""

import math
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Sequence

from tradestats.statistics.errors import InvalidTradeError
from tradestats.statistics.models import (
    AdvancedTradeStats,
    DrawdownResult,
    LargestWinLoss,
    StreakStats,
    StreakType,
    TradeMetrics,
    TradeProfit,
    TradeRecord,
)

TRADING_DAYS_PER_YEAR = 252


def _sum_pnl(trades: Sequence[TradeRecord]) -> float:
    return sum((t.pnl for t in trades), 0.0)


def _chronological(trades: Sequence[TradeRecord]) -> list[TradeRecord]:
    """Copy of trades sorted by trade_date (stable for equal timestamps)."""
    return sorted(trades, key=lambda t: t.trade_date)


def _round_half_away(value: float) -> float:
    """Round to 2 decimals on the exact binary value, ties away from zero."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _round_cents_half_up(value: float) -> float:
    """Round value * 100 to an integer with ties towards +inf, then back to units."""
    cents = (Decimal(value * 100) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR)
    return float(cents) / 100


# ---------------------------------------------------------------------------
# Trade-level aggregators
# ---------------------------------------------------------------------------


def calculate_win_rate(trades: Sequence[TradeRecord]) -> float:
    """
    Calculate win rate (fraction of profitable trades).

    Break-even trades (pnl == 0) count towards the total but not as wins.

    Args:
        trades: Sequence of trade records

    Returns:
        Win rate in [0, 1]; 0 for no trades

    Example:
        >>> calculate_win_rate([t(100), t(-50), t(200), t(-30), t(150)])
        0.6
    """
    if not trades:
        return 0.0

    wins = sum(1 for t in trades if t.pnl > 0)
    return wins / len(trades)


def calculate_profit_factor(trades: Sequence[TradeRecord]) -> float:
    """
    Calculate profit factor (gross profit / gross loss).

    Rules, in order:
    1. No trades → 0
    2. Gross loss is 0 → math.inf, even when gross profit is also 0
       (all break-even trades). This is a deliberate policy.
    3. Gross profit is 0 → 0
    4. Otherwise gross profit / |gross loss|

    Args:
        trades: Sequence of trade records

    Returns:
        Profit factor in [0, inf]

    Example:
        >>> calculate_profit_factor([t(100), t(-50), t(200), t(-30)])
        3.75
    """
    if not trades:
        return 0.0

    gross_profit = sum((t.pnl for t in trades if t.pnl > 0), 0.0)
    gross_loss = abs(sum((t.pnl for t in trades if t.pnl < 0), 0.0))

    if gross_loss == 0:
        return math.inf
    if gross_profit == 0:
        return 0.0

    return gross_profit / gross_loss


def calculate_expectancy(trades: Sequence[TradeRecord]) -> float:
    """
    Calculate expectancy (average PnL per trade).

    Example:
        >>> calculate_expectancy([t(100), t(-50), t(200), t(-30), t(80)])
        60.0
    """
    if not trades:
        return 0.0

    return _sum_pnl(trades) / len(trades)


def calculate_average_win(trades: Sequence[TradeRecord]) -> float:
    """Mean PnL of winning trades (0 if there are none). Not rounded."""
    winners = [t.pnl for t in trades if t.pnl > 0]
    if not winners:
        return 0.0

    return sum(winners) / len(winners)


def calculate_average_loss(trades: Sequence[TradeRecord]) -> float:
    """
    Mean PnL of losing trades, rounded to 2 decimal places with exact ties
    rounded away from zero (-0.125 -> -0.13).

    The result keeps its negative sign. Unlike the other aggregators this
    one is rounded; callers rely on that.

    Example:
        >>> calculate_average_loss([t(100), t(-50), t(200), t(-30), t(-120)])
        -66.67
    """
    losers = [t.pnl for t in trades if t.pnl < 0]
    if not losers:
        return 0.0

    return _round_half_away(sum(losers) / len(losers))


# ---------------------------------------------------------------------------
# Risk-adjusted return
# ---------------------------------------------------------------------------


def calculate_sharpe_ratio(returns: Sequence[float], annual_risk_free_rate: float = 0.02) -> float:
    """
    Calculate annualized Sharpe ratio of a per-period return series.

    Sharpe = (mean - rf / 252) / std * sqrt(252)

    The standard deviation is the population one (divides by N). The 252
    trading-day factor is fixed.

    Args:
        returns: Sequence of per-period fractional returns (0.02 = +2%)
        annual_risk_free_rate: Annual risk-free rate as a fraction

    Returns:
        Sharpe ratio. 0 for an empty series; math.inf for a constant series
        (zero standard deviation), whatever the sign of the excess return.

    Example:
        >>> calculate_sharpe_ratio([0.01, -0.005, 0.02], annual_risk_free_rate=0.0)
        12.87...
    """
    if not returns:
        return 0.0

    n = len(returns)
    mean_return = sum(returns) / n
    period_risk_free = annual_risk_free_rate / TRADING_DAYS_PER_YEAR

    variance = sum((r - mean_return) ** 2 for r in returns) / n
    std_dev = math.sqrt(variance)

    if std_dev == 0:
        return math.inf

    return (mean_return - period_risk_free) / std_dev * math.sqrt(TRADING_DAYS_PER_YEAR)


# ---------------------------------------------------------------------------
# Equity curve analysis
# ---------------------------------------------------------------------------


def calculate_max_drawdown(equity_curve: Sequence[float]) -> DrawdownResult:
    """
    Calculate the largest peak-to-trough decline of an equity curve.

    Single left-to-right scan keeping the running peak and its index. Only a
    strictly larger decline replaces the recorded maximum, so the first of
    several equal drawdowns wins.

    Args:
        equity_curve: Equity values in chronological order (not re-sorted)

    Returns:
        DrawdownResult with absolute drawdown, percentage of the peak, and
        the (peak index, trough index) span. Empty or never-declining curves
        give zeros with both indices at -1. A peak at or below zero reports
        0% drawdown.

    Example:
        >>> dd = calculate_max_drawdown([1000, 1100, 1050, 900, 950, 1200, 1150, 1000])
        >>> dd.max_drawdown, round(dd.max_drawdown_pct, 2), dd.start_index, dd.end_index
        (200.0, 18.18, 1, 3)
    """
    if not equity_curve:
        return DrawdownResult()

    max_drawdown = 0.0
    max_drawdown_pct = 0.0
    start_index = -1
    end_index = -1
    peak = equity_curve[0]
    peak_index = 0

    for i in range(1, len(equity_curve)):
        equity = equity_curve[i]
        if equity > peak:
            peak = equity
            peak_index = i
            continue

        drawdown = peak - equity
        if drawdown > max_drawdown:
            max_drawdown = drawdown
            max_drawdown_pct = (drawdown / peak) * 100 if peak > 0 else 0.0
            start_index = peak_index
            end_index = i

    return DrawdownResult(
        max_drawdown=max_drawdown,
        max_drawdown_pct=max_drawdown_pct,
        start_index=start_index,
        end_index=end_index,
    )


def build_equity_curve(trades: Sequence[TradeRecord], starting_equity: float = 0.0) -> list[float]:
    """
    Build a cumulative equity curve from trades.

    Trades are ordered by trade_date first; the curve has one point per
    trade (equity after that trade closed), with no leading point for the
    starting equity.

    Example:
        >>> build_equity_curve([t(100), t(-30), t(50)], starting_equity=1000)
        [1100.0, 1070.0, 1120.0]
    """
    curve: list[float] = []
    equity = float(starting_equity)
    for trade in _chronological(trades):
        equity += trade.pnl
        curve.append(equity)
    return curve


def calculate_returns(equity_curve: Sequence[float]) -> list[float]:
    """
    Period-over-period fractional returns of an equity curve.

    Periods whose previous equity is not positive have no defined return
    and are skipped.
    """
    returns: list[float] = []
    for i in range(1, len(equity_curve)):
        prev_equity = equity_curve[i - 1]
        if prev_equity > 0:
            returns.append(equity_curve[i] / prev_equity - 1)
    return returns


# ---------------------------------------------------------------------------
# Advanced trade statistics
# ---------------------------------------------------------------------------


def _outcome(pnl: float) -> StreakType:
    if pnl > 0:
        return "win"
    if pnl < 0:
        return "loss"
    return "breakeven"


def calculate_consecutive_streaks(trades: Sequence[TradeRecord]) -> StreakStats:
    """
    Longest runs of wins and losses, plus the streak still running.

    Trades are ordered by trade_date. A break-even trade ends both win and
    loss runs. The current streak counts how many of the most recent trades
    share the last trade's outcome (win or loss). A break-even last trade
    resets it: the type is "breakeven" with a streak of 0.
    """
    if not trades:
        return StreakStats()

    ordered = _chronological(trades)

    max_wins = 0
    max_losses = 0
    win_run = 0
    loss_run = 0

    for trade in ordered:
        if trade.pnl > 0:
            win_run += 1
            loss_run = 0
            max_wins = max(max_wins, win_run)
        elif trade.pnl < 0:
            loss_run += 1
            win_run = 0
            max_losses = max(max_losses, loss_run)
        else:
            win_run = 0
            loss_run = 0

    # Runs still open after the last trade; both are 0 after a break-even
    current_type = _outcome(ordered[-1].pnl)

    return StreakStats(
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        current_streak=win_run if current_type == "win" else loss_run,
        current_streak_type=current_type,
    )


def calculate_largest_win_loss(trades: Sequence[TradeRecord]) -> LargestWinLoss:
    """
    Find the biggest winner and the biggest loser.

    On ties the earliest trade in input order is reported. The loss is
    returned as a positive magnitude.
    """
    winners = [t for t in trades if t.pnl > 0]
    losers = [t for t in trades if t.pnl < 0]

    largest_win_trade = max(winners, key=lambda t: t.pnl) if winners else None
    largest_loss_trade = min(losers, key=lambda t: t.pnl) if losers else None

    return LargestWinLoss(
        largest_win=largest_win_trade.pnl if largest_win_trade else 0.0,
        largest_loss=abs(largest_loss_trade.pnl) if largest_loss_trade else 0.0,
        largest_win_trade=largest_win_trade,
        largest_loss_trade=largest_loss_trade,
    )


def calculate_recovery_factor(trades: Sequence[TradeRecord]) -> float:
    """
    Calculate recovery factor (net PnL / max drawdown).

    The drawdown is taken from the chronological cumulative-PnL curve
    (see build_equity_curve). Without any drawdown the result is math.inf
    for a net profit and 0 otherwise.
    """
    if not trades:
        return 0.0

    total_pnl = _sum_pnl(trades)
    max_drawdown = calculate_max_drawdown(build_equity_curve(trades)).max_drawdown

    if max_drawdown == 0:
        return math.inf if total_pnl > 0 else 0.0

    return total_pnl / max_drawdown


def calculate_payoff_ratio(trades: Sequence[TradeRecord]) -> float:
    """
    Calculate payoff ratio (average win / |average loss|).

    Uses the rounded average loss. No losses → math.inf if there are wins,
    else 0.
    """
    avg_win = calculate_average_win(trades)
    avg_loss = abs(calculate_average_loss(trades))

    if avg_loss == 0:
        return math.inf if avg_win > 0 else 0.0
    if avg_win == 0:
        return 0.0

    return avg_win / avg_loss


def calculate_win_loss_ratio(trades: Sequence[TradeRecord]) -> float:
    """Number of winners per loser (math.inf with winners but no losers)."""
    if not trades:
        return 0.0

    winners = sum(1 for t in trades if t.pnl > 0)
    losers = sum(1 for t in trades if t.pnl < 0)

    if losers == 0:
        return math.inf if winners > 0 else 0.0
    if winners == 0:
        return 0.0

    return winners / losers


def calculate_trade_metrics(trades: Sequence[TradeRecord]) -> TradeMetrics:
    """Count trades by outcome and total their PnL."""
    if not trades:
        return TradeMetrics()

    winners = [t.pnl for t in trades if t.pnl > 0]
    losers = [t.pnl for t in trades if t.pnl < 0]

    return TradeMetrics(
        total_trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        breakeven_trades=sum(1 for t in trades if t.pnl == 0),
        total_pnl=_sum_pnl(trades),
        gross_profit=sum(winners, 0.0),
        gross_loss=abs(sum(losers, 0.0)),
    )


def calculate_advanced_trade_stats(trades: Sequence[TradeRecord]) -> AdvancedTradeStats:
    """
    Calculate every trade-level statistic in one pass of composition.

    Args:
        trades: Sequence of trade records (any order)

    Returns:
        AdvancedTradeStats combining trade metrics, ratios, streaks and
        extremes. Each field follows the rules of its calculate_* function.
    """
    trade_metrics = calculate_trade_metrics(trades)
    streaks = calculate_consecutive_streaks(trades)
    extremes = calculate_largest_win_loss(trades)

    return AdvancedTradeStats(
        total_trades=trade_metrics.total_trades,
        win_rate=calculate_win_rate(trades),
        total_pnl=trade_metrics.total_pnl,
        avg_win=calculate_average_win(trades),
        avg_loss=calculate_average_loss(trades),
        profit_factor=calculate_profit_factor(trades),
        expectancy=calculate_expectancy(trades),
        payoff_ratio=calculate_payoff_ratio(trades),
        win_loss_ratio=calculate_win_loss_ratio(trades),
        recovery_factor=calculate_recovery_factor(trades),
        max_consecutive_wins=streaks.max_consecutive_wins,
        max_consecutive_losses=streaks.max_consecutive_losses,
        current_streak=streaks.current_streak,
        current_streak_type=streaks.current_streak_type,
        largest_win=extremes.largest_win,
        largest_loss=extremes.largest_loss,
        gross_profit=trade_metrics.gross_profit,
        gross_loss=trade_metrics.gross_loss,
        winning_trades=trade_metrics.winning_trades,
        losing_trades=trade_metrics.losing_trades,
        breakeven_trades=trade_metrics.breakeven_trades,
    )


def calculate_trade_profit(buy_price: float | None, sell_price: float | None, quantity: float | None) -> TradeProfit:
    """
    Calculate profit of a buy/sell round trip.

    Args:
        buy_price: Entry price (must be non-zero)
        sell_price: Exit price (must be non-zero)
        quantity: Number of units (must be non-zero)

    Returns:
        TradeProfit with profit = (sell - buy) * quantity and
        profit_pct = (sell - buy) / buy * 100, both rounded to 2 decimals
        with ties towards +inf (0.125 -> 0.13, -0.125 -> -0.12)

    Raises:
        InvalidTradeError: If any input is missing or zero, or a price is negative

    Example:
        >>> calculate_trade_profit(100, 110, 10)
        TradeProfit(profit=100.0, profit_pct=10.0)
    """
    if not buy_price or not sell_price or not quantity:
        raise InvalidTradeError("Invalid trade data")

    if buy_price < 0 or sell_price < 0:
        raise InvalidTradeError("Invalid price values")

    profit = (sell_price - buy_price) * quantity
    profit_pct = (sell_price - buy_price) / buy_price * 100

    return TradeProfit(profit=_round_cents_half_up(profit), profit_pct=_round_cents_half_up(profit_pct))
