"""
tradestats - Trading journal performance analytics

Public API for computing win rate, profit factor, drawdown, Sharpe ratio and
time-bucketed breakdowns from closed trade records.
"""

from importlib.metadata import version

try:
    __version__ = version("tradestats")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
