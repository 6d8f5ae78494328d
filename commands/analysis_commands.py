# ═══════════════════════════════════════════════════════════════════
# commands/analysis_commands.py - Trade analysis command
# ═══════════════════════════════════════════════════════════════════

import json
import logging
import typer
import rich
from rich.console import Console

from commands import cfg
from models import TradeFormState, SELL, MTF
from price_sync import on_buy_price_edited, on_price_edited, on_percent_edited
from validation import validate
from calculator import calculate
from formatting import build_result_table, result_to_dict

logger = logging.getLogger(__name__)

analysis_app = typer.Typer()

# notices go to stderr so --json output stays parseable
err_console = Console(stderr=True)

FIELD_LABELS = {
    "stock_name": "Stock",
    "buy_price": "Buy price",
    "shares": "Shares",
    "sell_price": "Sell price",
    "margin_multiplier": "Margin",
    "mtf_target_price": "MTF target",
    "holding_period_days": "Holding days",
    "broker_interest_rate": "Interest rate %",
    "stop_loss_price": "Stop loss",
}

def _ask(value, label, interactive, default=None):
    """Return value, prompting for it when missing and prompts are allowed"""
    if value is not None:
        return value
    if not interactive:
        return default if default is not None else ""
    if default is not None:
        return typer.prompt(label, default=default)
    return typer.prompt(label)

def apply_target(state, pair, price, percent, label, interactive):
    """Route a price or a % change from buy into the synchronized pair"""
    if price is not None:
        if percent is not None:
            err_console.print(f"[yellow]Both {label.lower()} and % given; using {price!r} and ignoring {percent!r}%[/]")
        return on_price_edited(state, pair, price)
    if percent is not None:
        state = on_percent_edited(state, pair, percent)
        if not getattr(state, state.pair_fields(pair)[0]):
            rich.print(f"[yellow]Cannot derive {label.lower()} from {percent!r}% (needs a valid buy price and percent)[/]")
        return state
    return on_price_edited(state, pair, _ask(None, label, interactive))

def build_form(
    stock, buy, shares, sell, sell_pct, stop_loss,
    mtf, margin, mtf_target, mtf_pct, days, rate,
    interactive=True,
):
    """Fill a TradeFormState the way the form would: field by field, syncing pairs"""
    state = TradeFormState.from_defaults(cfg)

    state.stock_name = _ask(stock, "Stock", interactive)
    state = on_buy_price_edited(state, _ask(buy, "Buy price", interactive))
    state.shares = _ask(shares, "Shares", interactive)

    state = apply_target(state, SELL, sell, sell_pct, "Sell price", interactive)

    if stop_loss is not None:
        state.stop_loss_price = stop_loss

    state.mtf_enabled = mtf
    if mtf:
        state.margin_multiplier = _ask(margin, "Margin", interactive, state.margin_multiplier)
        state = apply_target(state, MTF, mtf_target, mtf_pct, "MTF target", interactive)
        state.holding_period_days = _ask(days, "Holding days", interactive, state.holding_period_days)
        state.broker_interest_rate = _ask(rate, "Interest rate %", interactive, state.broker_interest_rate)

    return state

def show_errors(errors):
    rich.print("[red]❌ Cannot analyze trade:[/]")
    for name, reason in errors.items():
        rich.print(f"[red]  - {FIELD_LABELS.get(name, name)}: {reason}[/]")

@analysis_app.command("analyze")
def analyze_trade(
    stock: str = typer.Option(None, "--stock", "-s", help="Stock name"),
    buy: str = typer.Option(None, "--buy", "-b", help="Buy price per share"),
    shares: str = typer.Option(None, "--shares", "-q", help="Number of shares"),
    sell: str = typer.Option(None, "--sell", help="Target sell price"),
    sell_pct: str = typer.Option(None, "--sell-pct", help="Target sell price as % change from buy"),
    stop_loss: str = typer.Option(None, "--stop-loss", help="Stop loss price"),
    mtf: bool = typer.Option(False, "--mtf/--no-mtf", help="Analyze a margin trading facility position"),
    margin: str = typer.Option(None, "--margin", "-m", help="Margin multiplier (> 1)"),
    mtf_target: str = typer.Option(None, "--mtf-target", help="MTF target price"),
    mtf_pct: str = typer.Option(None, "--mtf-pct", help="MTF target as % change from buy"),
    days: str = typer.Option(None, "--days", "-d", help="Holding period in days"),
    rate: str = typer.Option(None, "--rate", "-r", help="Broker annual interest rate %"),
    no_input: bool = typer.Option(False, "--no-input", help="Never prompt for missing values"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Analyze profit/loss for a trade, with optional MTF and stop loss"""
    if cfg is None:
        rich.print("[red]Error: Global configuration not properly initialized[/]")
        raise typer.Exit(code=1)

    state = build_form(
        stock, buy, shares, sell, sell_pct, stop_loss,
        mtf, margin, mtf_target, mtf_pct, days, rate,
        interactive=not no_input,
    )

    if sell is None and state.sell_percent and not as_json:
        rich.print(f"[dim]Sell price {state.sell_price} ({state.sell_percent}% from buy)[/]")

    outcome = validate(state)
    if not outcome.ok:
        show_errors(outcome.errors)
        raise typer.Exit(code=1)

    trade = outcome.trade
    result = calculate(trade)
    logger.info("Analyzed %s", trade.stock_name)

    if as_json:
        data = {"stock_name": trade.stock_name, **result_to_dict(result)}
        typer.echo(json.dumps(data, indent=2))
        return

    rich.print(build_result_table(trade.stock_name, result, cfg))

    if result.mtf is not None and result.mtf.gross_profit_loss >= 0 > result.mtf.net_profit_loss:
        rich.print("[yellow]⚠️  Interest cost turns this MTF position into a loss[/]")
