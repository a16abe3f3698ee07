"""Trade statistics data models.

Pydantic models for the trade records consumed by the engine and the result
structures it produces. All models are frozen: each call returns a fresh,
immutable value.
"""

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

StreakType = Literal["win", "loss", "breakeven", "none"]


class TradeRecord(BaseModel):
    """
    Record of a closed trade.

    Only `pnl` and `trade_date` are read by the statistics functions. The
    remaining fields describe the trade for reporting and are optional.

    `trade_date` is treated as naive local time: grouping uses its date and
    hour components exactly as given, with no timezone conversion.

    NaN and infinite numbers are rejected in every numeric field.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    pnl: float  # Realized profit/loss in currency units, finite
    trade_date: datetime
    trade_id: str | None = None
    symbol: str | None = None
    side: Literal["LONG", "SHORT"] | None = None
    entry_price: float | None = None
    exit_price: float | None = None
    position_size: float | None = None
    stop_loss: float | None = None
    exit_date: datetime | None = None

    @property
    def is_winner(self) -> bool:
        """Trade was profitable."""
        return self.pnl > 0

    @property
    def is_loser(self) -> bool:
        """Trade lost money."""
        return self.pnl < 0

    @property
    def is_breakeven(self) -> bool:
        """Trade closed flat."""
        return self.pnl == 0

    @property
    def risk_reward_ratio(self) -> float | None:
        """Realized reward over initial risk to the stop loss.

        None when the exit price, stop loss or entry price is missing, or
        when the stop sits at the entry price.
        """
        if not self.exit_price or not self.stop_loss or self.entry_price is None:
            return None

        if self.side == "SHORT":
            reward = self.entry_price - self.exit_price
            risk = self.stop_loss - self.entry_price
        else:
            reward = self.exit_price - self.entry_price
            risk = self.entry_price - self.stop_loss

        if risk == 0:
            return None

        return reward / risk

    @property
    def duration_seconds(self) -> int | None:
        """Whole seconds the trade was held (None while no exit date)."""
        if self.exit_date is None:
            return None
        return math.floor((self.exit_date - self.trade_date).total_seconds())


class TradeProfit(BaseModel):
    """Profit of a single buy/sell round trip."""

    model_config = ConfigDict(frozen=True)

    profit: float
    profit_pct: float


class DrawdownResult(BaseModel):
    """
    Maximum drawdown of an equity curve.

    Indices point into the input curve: `start_index` is the peak and
    `end_index` the trough of the largest drawdown. Both are -1 when the
    curve is empty or never declines.
    """

    model_config = ConfigDict(frozen=True)

    max_drawdown: float = 0.0
    max_drawdown_pct: float = 0.0
    start_index: int = -1
    end_index: int = -1


class DailyPnL(BaseModel):
    """PnL of one calendar day with the running total up to that day."""

    model_config = ConfigDict(frozen=True)

    date: str  # YYYY-MM-DD
    pnl: float
    cumulative: float


class BucketStats(BaseModel):
    """Aggregate of the trades that fall into one weekday or hour bucket."""

    model_config = ConfigDict(frozen=True)

    total_pnl: float = 0.0
    trade_count: int = 0
    avg_pnl: float = 0.0
    win_rate: float = 0.0


class StreakStats(BaseModel):
    """Consecutive win/loss runs in chronological order."""

    model_config = ConfigDict(frozen=True)

    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    current_streak: int = 0
    current_streak_type: StreakType = "none"


class LargestWinLoss(BaseModel):
    """Most extreme winning and losing trades.

    `largest_loss` is reported as a positive magnitude.
    """

    model_config = ConfigDict(frozen=True)

    largest_win: float = 0.0
    largest_loss: float = 0.0
    largest_win_trade: TradeRecord | None = None
    largest_loss_trade: TradeRecord | None = None


class TradeMetrics(BaseModel):
    """Counts and PnL totals of a trade set."""

    model_config = ConfigDict(frozen=True)

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    breakeven_trades: int = 0
    total_pnl: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0  # Absolute value


class AdvancedTradeStats(BaseModel):
    """
    Complete trade-level statistics for a journal.

    Ratio fields may be `math.inf` where the underlying denominator is zero
    (see the individual calculate_* functions for the exact rules).
    """

    model_config = ConfigDict(frozen=True)

    # Basic
    total_trades: int
    win_rate: float
    total_pnl: float
    avg_win: float
    avg_loss: float

    # Ratios
    profit_factor: float
    expectancy: float
    payoff_ratio: float
    win_loss_ratio: float
    recovery_factor: float

    # Streaks
    max_consecutive_wins: int
    max_consecutive_losses: int
    current_streak: int
    current_streak_type: StreakType

    # Extremes
    largest_win: float
    largest_loss: float

    # Totals
    gross_profit: float
    gross_loss: float
    winning_trades: int
    losing_trades: int
    breakeven_trades: int
