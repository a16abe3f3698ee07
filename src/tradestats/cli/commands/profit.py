"""Single trade profit command."""

import sys

import click
from rich.console import Console

from tradestats.statistics import InvalidTradeError, calculate_trade_profit

console = Console()


@click.command("profit")
@click.option("--buy", "buy_price", type=float, required=True, help="Buy (entry) price")
@click.option("--sell", "sell_price", type=float, required=True, help="Sell (exit) price")
@click.option("--quantity", "-q", type=float, required=True, help="Number of units traded")
def profit_command(buy_price: float, sell_price: float, quantity: float):
    """
    Calculate profit of a single buy/sell round trip.

    \b
    Example:
        tradestats profit --buy 100 --sell 110 -q 10
    """
    try:
        result = calculate_trade_profit(buy_price, sell_price, quantity)
    except InvalidTradeError as e:
        console.print(f"[bold red]✗ {e}[/bold red]")
        sys.exit(1)

    color = "green" if result.profit >= 0 else "red"
    console.print(f"Profit: [{color}]{result.profit:,.2f}[/{color}] ([{color}]{result.profit_pct:.2f}%[/{color}])")
