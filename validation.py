# ═══════════════════════════════════════════════════════════════════
# validation.py - Form field validation into a TradeInput
# ═══════════════════════════════════════════════════════════════════

from __future__ import annotations
import dataclasses
import decimal as dec
import logging
from typing import Any, Mapping

from models import TradeFormState, TradeInput, ValidationOutcome
from utils import parse_number, is_blank, in_range, MIN_EXPONENT, MAX_EXPONENT

logger = logging.getLogger(__name__)

ONE = dec.Decimal("1")
RANGE_MESSAGE = f"must be between 1e{MIN_EXPONENT} and 1e{MAX_EXPONENT + 1} in size"
ZERO = dec.Decimal("0")

# field -> (predicate on the parsed value, message when it fails)
BASE_RULES = {
    "buy_price": (lambda v: v > ZERO, "Valid buy price is required (must be greater than 0)"),
    "shares": (lambda v: v > ZERO, "Valid number of shares is required (must be greater than 0)"),
    "sell_price": (lambda v: v > ZERO, "Valid sell price is required (must be greater than 0)"),
}

MTF_RULES = {
    "margin_multiplier": (lambda v: v > ONE, "Margin multiplier must be greater than 1"),
    "mtf_target_price": (lambda v: v > ZERO, "Valid MTF target price is required (must be greater than 0)"),
    "holding_period_days": (lambda v: v >= ONE, "Holding period must be at least 1 day"),
    "broker_interest_rate": (lambda v: v > ZERO, "Broker interest rate must be greater than 0"),
}

def _as_mapping(fields: TradeFormState | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(fields, TradeFormState):
        return dataclasses.asdict(fields)
    return fields

def _as_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)

def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()

def _check(raw: Mapping[str, Any], rules: dict, parsed: dict, errors: dict):
    for name, (accept, message) in rules.items():
        number = parse_number(raw.get(name))
        if number is None or not accept(number):
            errors[name] = message
        elif not in_range(number):
            errors[name] = f"{_label(name)} {RANGE_MESSAGE}"
        else:
            parsed[name] = number

def validate(fields: TradeFormState | Mapping[str, Any]) -> ValidationOutcome:
    """Validate raw form fields.

    Returns a ValidationOutcome holding either the TradeInput or a map of
    field name to reason. Never raises for bad input; the caller decides
    what to do with the errors.
    """
    raw = _as_mapping(fields)
    errors: dict[str, str] = {}
    parsed: dict[str, dec.Decimal] = {}

    stock_name = raw.get("stock_name") or ""
    if not str(stock_name).strip():
        errors["stock_name"] = "Stock name is required"

    _check(raw, BASE_RULES, parsed, errors)

    mtf_enabled = _as_flag(raw.get("mtf_enabled", False))
    if mtf_enabled:
        _check(raw, MTF_RULES, parsed, errors)

    stop_loss = None
    if not is_blank(raw.get("stop_loss_price")):
        stop_loss = parse_number(raw.get("stop_loss_price"))
        if stop_loss is None:
            errors["stop_loss_price"] = "Stop loss price must be a number"
        elif not in_range(stop_loss):
            errors["stop_loss_price"] = f"Stop loss price {RANGE_MESSAGE}"

    if errors:
        logger.debug("Rejected trade input: %s", errors)
        return ValidationOutcome(errors=errors)

    trade = TradeInput(
        stock_name=str(stock_name).strip(),
        buy_price=parsed["buy_price"],
        shares=parsed["shares"],
        sell_price=parsed["sell_price"],
        mtf_enabled=mtf_enabled,
        margin_multiplier=parsed.get("margin_multiplier"),
        mtf_target_price=parsed.get("mtf_target_price"),
        holding_period_days=parsed.get("holding_period_days"),
        broker_interest_rate=parsed.get("broker_interest_rate"),
        stop_loss_price=stop_loss,
    )
    return ValidationOutcome(trade=trade)
