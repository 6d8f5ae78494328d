# ═══════════════════════════════════════════════════════════════════
# commands/config_commands.py - Configuration inspection commands
# ═══════════════════════════════════════════════════════════════════

import typer
import rich
from rich.table import Table

from commands import cfg
import config as config_module

config_app = typer.Typer()

@config_app.command("show")
def show_config():
    """Show the active configuration"""
    if cfg is None:
        rich.print("[red]Error: Global configuration not properly initialized[/]")
        raise typer.Exit(code=1)

    tbl = Table(title="Configuration")
    tbl.add_column("Setting", justify="left")
    tbl.add_column("Value", justify="right")

    for section, values in cfg.items():
        if isinstance(values, dict):
            for key, value in values.items():
                tbl.add_row(f"{section}.{key}", str(value))
        else:
            tbl.add_row(section, str(values))

    rich.print(tbl)

@config_app.command("check")
def check_config():
    """Validate the active configuration"""
    if not config_module.validate_config(cfg or {}):
        raise typer.Exit(code=1)

@config_app.command("path")
def show_path():
    """Show which configuration file is in use"""
    rich.print(str(config_module.CONFIG_FILE.resolve()))
