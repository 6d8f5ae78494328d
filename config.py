# ═══════════════════════════════════════════════════════════════════
# config.py - YAML configuration with form and display defaults
# ═══════════════════════════════════════════════════════════════════

import copy
import logging
import pathlib
from ruamel.yaml import YAML
import rich

yaml = YAML(typ="safe")
CONFIG_FILE = pathlib.Path("config.yaml")

GROUPINGS = ["indian", "western"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_CFG = {
    "defaults": {
        "margin_multiplier": "2.5",
        "holding_period_days": "7",
        "broker_interest_rate": "12",
    },
    "display": {
        "currency_symbol": "₹",
        "grouping": "indian",
    },
    "logging": {
        "level": "WARNING",
    },
}

class ConfigError(ValueError):
    """Configuration file could not be used"""

def merge_defaults(cfg, defaults=DEFAULT_CFG):
    """Fill keys missing from cfg with the built-in defaults (recursively)"""
    merged = copy.deepcopy(defaults)
    for key, value in (cfg or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_defaults(value, merged[key])
        else:
            merged[key] = value
    return merged

def load_config(path=None):
    """Load configuration, creating the default file when it doesn't exist"""
    config_file = pathlib.Path(path) if path else CONFIG_FILE

    if not config_file.exists():
        rich.print(f"[yellow]Creating default {config_file.name}...[/]")
        yaml.dump(DEFAULT_CFG, config_file)

    cfg = yaml.load(config_file)
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{config_file} must contain a mapping, got {type(cfg).__name__}")

    return merge_defaults(cfg)

def save_config(config, path=None):
    """Save configuration to file"""
    yaml.dump(config, pathlib.Path(path) if path else CONFIG_FILE)

def validate_config(cfg):
    """Validate display and logging settings, printing any problems"""
    errors = []

    grouping = cfg.get("display", {}).get("grouping")
    if grouping not in GROUPINGS:
        errors.append(f"display.grouping must be one of {', '.join(GROUPINGS)}, got {grouping!r}")

    level = str(cfg.get("logging", {}).get("level", "")).upper()
    if level not in LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")

    for key, value in cfg.get("defaults", {}).items():
        if key not in DEFAULT_CFG["defaults"]:
            errors.append(f"Unknown default field '{key}'")
        elif not str(value).strip():
            errors.append(f"Default for '{key}' is empty")

    if errors:
        rich.print("[red]Configuration errors:[/]")
        for error in errors:
            rich.print(f"[red]  - {error}[/]")
        return False

    logging.getLogger(__name__).debug("Configuration is valid")
    return True

def get_log_level(cfg):
    level = str(cfg.get("logging", {}).get("level", "WARNING")).upper()
    return level if level in LOG_LEVELS else "WARNING"
