# ═══════════════════════════════════════════════════════════════════
# analyzer.py - Main application: trade profit/loss and MTF analysis
# ═══════════════════════════════════════════════════════════════════
from __future__ import annotations
import pathlib
import typer

import config as config_module
from config import load_config, get_log_level
from log import setup_logging
from commands import set_globals

from commands.analysis_commands import analysis_app, analyze_trade
from commands.sync_commands import sync_app
from commands.config_commands import config_app

# Create main app and add sub-apps
app = typer.Typer(help="Equity trade profit/loss analyzer with MTF and stop loss estimates")
app.add_typer(analysis_app, name="trade", help="Trade analysis")
app.add_typer(sync_app, name="sync", help="Convert between target price and % change")
app.add_typer(config_app, name="config", help="Configuration")

@app.callback()
def main(
    config_path: str = typer.Option(str(config_module.CONFIG_FILE), "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Load configuration and set up logging before any command runs"""
    config_module.CONFIG_FILE = pathlib.Path(config_path)
    cfg = load_config()
    setup_logging("DEBUG" if verbose else get_log_level(cfg))
    set_globals(cfg)

# ═══════════════════════════════════════════════════════════════════
# SHORTCUT ALIASES
# ═══════════════════════════════════════════════════════════════════

@app.command("analyze")
def analyze_alias(
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
    """Analyze a trade (alias for 'trade analyze')"""
    return analyze_trade(
        stock, buy, shares, sell, sell_pct, stop_loss,
        mtf, margin, mtf_target, mtf_pct, days, rate,
        no_input, as_json,
    )


if __name__ == "__main__":
    app()
