# ═══════════════════════════════════════════════════════════════════
# commands/sync_commands.py - Price <-> % change conversions
# ═══════════════════════════════════════════════════════════════════

import typer
import rich

from price_sync import sync_from_price, sync_from_percent, usable_buy_price

sync_app = typer.Typer()

def _require_buy(buy):
    if usable_buy_price(buy) is None:
        rich.print(f"[red]Buy price must be a number greater than 0 (got {buy!r})[/]")
        raise typer.Exit(code=1)

def _require(value, label, raw):
    if value is None:
        rich.print(f"[red]{label} must be a number (got {raw!r})[/]")
        raise typer.Exit(code=1)
    return value

@sync_app.command("price")
def price_to_percent(
    buy: str = typer.Argument(help="Buy price per share"),
    price: str = typer.Argument(help="Target price"),
):
    """Show the % change from buy price for a target price"""
    _require_buy(buy)
    percent = _require(sync_from_price(buy, price), "Target price", price)
    color = "green" if percent >= 0 else "red"
    rich.print(f"[{color}]{percent:+.2f}%[/] from buy price {buy}")

@sync_app.command("percent")
def percent_to_price(
    buy: str = typer.Argument(help="Buy price per share"),
    percent: str = typer.Argument(help="% change from buy price"),
):
    """Show the target price that is a given % away from the buy price"""
    _require_buy(buy)
    price = _require(sync_from_percent(buy, percent), "Percent", percent)
    rich.print(f"Target price: [bold]{price:.2f}[/] ({percent}% from buy price {buy})")
