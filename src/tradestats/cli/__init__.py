"""Command line interface for tradestats."""
