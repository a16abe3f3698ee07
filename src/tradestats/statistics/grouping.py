"""Temporal grouping of trades.

Buckets trades by calendar day, week, month, weekday and hour of day.

Calendar conventions:
- Timestamps are naive local time. Date and hour components are used as
  given; aware datetimes are not converted to UTC or any other zone.
- Weeks start on Sunday. A week key is the ISO date of that Sunday.
- Weekday numbering follows the Sunday = 0 convention (WEEKDAYS order).
"""

from datetime import datetime, timedelta
from typing import Callable, Literal, Sequence

from tradestats.statistics.errors import InvalidTimeframeError
from tradestats.statistics.metrics import calculate_win_rate
from tradestats.statistics.models import BucketStats, DailyPnL, TradeRecord

Timeframe = Literal["day", "week", "month"]

TIMEFRAMES: tuple[str, ...] = ("day", "week", "month")

WEEKDAYS: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

HOURS: tuple[int, ...] = tuple(range(24))


def sunday_index(timestamp: datetime) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return timestamp.isoweekday() % 7


def _day_key(timestamp: datetime) -> str:
    return timestamp.date().isoformat()


def _week_key(timestamp: datetime) -> str:
    week_start = timestamp.date() - timedelta(days=sunday_index(timestamp))
    return week_start.isoformat()


def _month_key(timestamp: datetime) -> str:
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


_KEY_FUNCTIONS: dict[str, Callable[[datetime], str]] = {
    "day": _day_key,
    "week": _week_key,
    "month": _month_key,
}


def _key_function(timeframe: str) -> Callable[[datetime], str]:
    key_fn = _KEY_FUNCTIONS.get(timeframe) if isinstance(timeframe, str) else None
    if key_fn is None:
        raise InvalidTimeframeError(timeframe)
    return key_fn


def group_by_timeframe(trades: Sequence[TradeRecord], timeframe: Timeframe) -> dict[str, list[TradeRecord]]:
    """
    Partition trades into day, week or month buckets.

    Keys appear in the order they are first seen in the input, which is not
    necessarily chronological. Within a bucket, trades keep their input
    order.

    Args:
        trades: Sequence of trade records
        timeframe: "day", "week" or "month"

    Returns:
        Mapping of bucket key to the trades in that bucket

    Raises:
        InvalidTimeframeError: If timeframe is not recognized (checked even
            for an empty trade list)

    Example:
        >>> grouped = group_by_timeframe(trades, "month")
        >>> list(grouped)
        ['2024-01', '2024-02']
    """
    key_fn = _key_function(timeframe)

    grouped: dict[str, list[TradeRecord]] = {}
    for trade in trades:
        grouped.setdefault(key_fn(trade.trade_date), []).append(trade)

    return grouped


def calculate_daily_pnl(trades: Sequence[TradeRecord]) -> list[DailyPnL]:
    """
    Sum PnL per calendar day with a running cumulative total.

    Days are sorted ascending by their YYYY-MM-DD key (chronological order)
    before the running total is accumulated. Days without trades are not
    emitted.

    Example:
        >>> [(d.date, d.pnl, d.cumulative) for d in calculate_daily_pnl(trades)]
        [('2024-01-01', 150.0, 150.0), ('2024-01-02', -30.0, 120.0), ('2024-01-03', 80.0, 200.0)]
    """
    if not trades:
        return []

    daily_groups = group_by_timeframe(trades, "day")

    result: list[DailyPnL] = []
    cumulative = 0.0
    for date_key in sorted(daily_groups):
        day_pnl = sum((t.pnl for t in daily_groups[date_key]), 0.0)
        cumulative += day_pnl
        result.append(DailyPnL(date=date_key, pnl=day_pnl, cumulative=cumulative))

    return result


def _bucket_stats(trades: list[TradeRecord]) -> BucketStats:
    if not trades:
        return BucketStats()

    total_pnl = sum((t.pnl for t in trades), 0.0)
    return BucketStats(
        total_pnl=total_pnl,
        trade_count=len(trades),
        avg_pnl=total_pnl / len(trades),
        win_rate=calculate_win_rate(trades),
    )


def calculate_weekday_stats(trades: Sequence[TradeRecord]) -> dict[str, BucketStats]:
    """
    Aggregate trades by day of week.

    Returns:
        Mapping with all seven weekday names, Sunday through Saturday, in
        that order. Weekdays without trades hold zero-valued BucketStats.
    """
    by_weekday: dict[str, list[TradeRecord]] = {day: [] for day in WEEKDAYS}
    for trade in trades:
        by_weekday[WEEKDAYS[sunday_index(trade.trade_date)]].append(trade)

    return {day: _bucket_stats(day_trades) for day, day_trades in by_weekday.items()}


def calculate_hourly_stats(trades: Sequence[TradeRecord]) -> dict[int, BucketStats]:
    """
    Aggregate trades by hour of day (0-23, local hour of the timestamp).

    Returns:
        Mapping with all 24 hours in ascending order. Hours without trades
        hold zero-valued BucketStats.
    """
    by_hour: dict[int, list[TradeRecord]] = {hour: [] for hour in HOURS}
    for trade in trades:
        by_hour[trade.trade_date.hour].append(trade)

    return {hour: _bucket_stats(hour_trades) for hour, hour_trades in by_hour.items()}
