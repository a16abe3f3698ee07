"""Root conftest for all tests - shared trade fixtures."""

from datetime import datetime

import pytest

from tradestats.statistics.models import TradeRecord


@pytest.fixture
def mixed_trades():
    """Five trades over three days starting Monday 2024-01-01: 3 wins, 2 losses, total PnL 370."""
    return [
        TradeRecord(pnl=100, trade_date=datetime(2024, 1, 1, 9, 30), symbol="AAPL"),
        TradeRecord(pnl=-50, trade_date=datetime(2024, 1, 1, 14, 15), symbol="MSFT"),
        TradeRecord(pnl=200, trade_date=datetime(2024, 1, 2, 10, 0), symbol="AAPL"),
        TradeRecord(pnl=-30, trade_date=datetime(2024, 1, 3, 9, 45), symbol="TSLA"),
        TradeRecord(pnl=150, trade_date=datetime(2024, 1, 3, 15, 0), symbol="NVDA"),
    ]
