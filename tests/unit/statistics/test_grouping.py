"""Tests for calendar grouping of trades."""

from datetime import datetime

import pytest

from tradestats.statistics import InvalidArgumentError, InvalidTimeframeError, TradeRecord
from tradestats.statistics.grouping import (
    HOURS,
    WEEKDAYS,
    calculate_daily_pnl,
    calculate_hourly_stats,
    calculate_weekday_stats,
    group_by_timeframe,
    sunday_index,
)


def make_trade(pnl: float, trade_date: datetime) -> TradeRecord:
    return TradeRecord(pnl=pnl, trade_date=trade_date)


@pytest.fixture
def journal():
    """Four trades over three days starting Monday 2024-01-01."""
    return [
        make_trade(100, datetime(2024, 1, 1, 9, 30)),
        make_trade(50, datetime(2024, 1, 1, 15, 0)),
        make_trade(-30, datetime(2024, 1, 2, 9, 45)),
        make_trade(80, datetime(2024, 1, 3, 11, 0)),
    ]


class TestGroupByTimeframe:
    """Test group_by_timeframe."""

    def test_group_by_day(self):
        """Test trades on two days form two buckets."""
        trades = [
            make_trade(10, datetime(2024, 1, 1, 9)),
            make_trade(20, datetime(2024, 1, 1, 16)),
            make_trade(30, datetime(2024, 1, 2, 10)),
        ]

        grouped = group_by_timeframe(trades, "day")

        assert list(grouped) == ["2024-01-01", "2024-01-02"]
        assert [t.pnl for t in grouped["2024-01-01"]] == [10, 20]

    def test_week_key_is_sunday(self):
        """Test week buckets are keyed by the preceding Sunday."""
        trades = [
            make_trade(10, datetime(2024, 1, 1)),  # Monday
            make_trade(20, datetime(2024, 1, 6)),  # Saturday, same week
            make_trade(30, datetime(2024, 1, 7)),  # Sunday, new week
        ]

        grouped = group_by_timeframe(trades, "week")

        assert list(grouped) == ["2023-12-31", "2024-01-07"]
        assert len(grouped["2023-12-31"]) == 2

    def test_group_by_month(self):
        """Test month buckets use zero-padded YYYY-MM keys."""
        trades = [
            make_trade(10, datetime(2024, 2, 10)),
            make_trade(20, datetime(2024, 1, 31)),
            make_trade(30, datetime(2024, 2, 1)),
        ]

        grouped = group_by_timeframe(trades, "month")

        assert list(grouped) == ["2024-02", "2024-01"]
        assert [t.pnl for t in grouped["2024-02"]] == [10, 30]

    def test_invalid_timeframe_raises(self, journal):
        """Test unknown timeframe is rejected."""
        with pytest.raises(InvalidTimeframeError) as exc_info:
            group_by_timeframe(journal, "year")  # type: ignore[arg-type]

        assert exc_info.value.timeframe == "year"
        assert isinstance(exc_info.value, InvalidArgumentError)

    def test_invalid_timeframe_raises_for_empty_input(self):
        """Test timeframe is validated even without trades."""
        with pytest.raises(InvalidTimeframeError):
            group_by_timeframe([], "quarter")  # type: ignore[arg-type]

    def test_empty_input(self):
        """Test no trades gives no buckets."""
        assert group_by_timeframe([], "day") == {}

    def test_partition_preserves_all_trades(self, journal):
        """Test every trade lands in exactly one bucket."""
        for timeframe in ("day", "week", "month"):
            grouped = group_by_timeframe(journal, timeframe)

            assert sum(len(bucket) for bucket in grouped.values()) == len(journal)


class TestDailyPnL:
    """Test calculate_daily_pnl."""

    def test_daily_cumulative(self, journal):
        """Test per-day sums with running total."""
        result = calculate_daily_pnl(journal)

        assert [(d.date, d.pnl, d.cumulative) for d in result] == [
            ("2024-01-01", 150, 150),
            ("2024-01-02", -30, 120),
            ("2024-01-03", 80, 200),
        ]

    def test_days_sorted_regardless_of_input_order(self, journal):
        """Test output is chronological for shuffled input."""
        result = calculate_daily_pnl(list(reversed(journal)))

        assert [d.date for d in result] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert result[-1].cumulative == 200

    def test_empty(self):
        """Test no trades gives no days."""
        assert calculate_daily_pnl([]) == []


class TestWeekdayStats:
    """Test calculate_weekday_stats."""

    def test_all_weekdays_present(self, journal):
        """Test seven buckets, Sunday first."""
        result = calculate_weekday_stats(journal)

        assert list(result) == list(WEEKDAYS)
        assert list(result)[0] == "Sunday"

    def test_weekday_buckets(self, journal):
        """Test trades land on their weekday."""
        result = calculate_weekday_stats(journal)

        monday = result["Monday"]
        assert monday.trade_count == 2
        assert monday.total_pnl == 150
        assert monday.avg_pnl == 75
        assert monday.win_rate == 1.0

        assert result["Tuesday"].win_rate == 0
        assert result["Sunday"].trade_count == 0
        assert result["Sunday"].avg_pnl == 0

    def test_weekday_totals_match_input(self, journal):
        """Test bucket totals add up to the journal total."""
        result = calculate_weekday_stats(journal)

        assert sum(b.total_pnl for b in result.values()) == sum(t.pnl for t in journal)
        assert sum(b.trade_count for b in result.values()) == len(journal)

    def test_sunday_index(self):
        """Test Sunday = 0 numbering."""
        assert sunday_index(datetime(2024, 1, 7)) == 0
        assert sunday_index(datetime(2024, 1, 1)) == 1
        assert sunday_index(datetime(2024, 1, 6)) == 6


class TestHourlyStats:
    """Test calculate_hourly_stats."""

    def test_all_hours_present(self):
        """Test 24 buckets even without trades."""
        result = calculate_hourly_stats([])

        assert list(result) == list(HOURS)
        assert len(result) == 24
        assert all(b.trade_count == 0 for b in result.values())

    def test_hourly_buckets(self, journal):
        """Test trades land on their local hour."""
        result = calculate_hourly_stats(journal)

        assert result[9].trade_count == 2
        assert result[9].total_pnl == 70
        assert result[9].win_rate == 0.5
        assert result[15].total_pnl == 50
        assert result[0].trade_count == 0

    def test_hourly_totals_match_input(self, journal):
        """Test bucket totals add up to the journal total."""
        result = calculate_hourly_stats(journal)

        assert sum(b.total_pnl for b in result.values()) == 200
