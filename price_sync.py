# ═══════════════════════════════════════════════════════════════════
# price_sync.py - Keep target prices and their % change from buy in step
# ═══════════════════════════════════════════════════════════════════

from __future__ import annotations
import dataclasses
import decimal as dec
import logging

from models import TradeFormState, SELL, MTF
from utils import parse_number, in_range, round2, HUNDRED

logger = logging.getLogger(__name__)

PAIRS = (SELL, MTF)

def _number(value) -> dec.Decimal | None:
    number = parse_number(value)
    if number is None or not in_range(number):
        return None
    return number

def usable_buy_price(buy_price) -> dec.Decimal | None:
    """Buy price as a positive Decimal, or None when it can't drive a sync"""
    bp = _number(buy_price)
    if bp is None or bp <= 0:
        return None
    return bp

def sync_from_price(buy_price, new_price) -> dec.Decimal | None:
    """Percent change of new_price from buy_price, rounded to 2 places.

    None when the buy price is missing, non-numeric or not positive, or
    when new_price is not a number. Numbers outside the supported range
    count as not numeric.
    """
    bp = usable_buy_price(buy_price)
    price = _number(new_price)
    if bp is None or price is None:
        return None
    return round2((price - bp) / bp * HUNDRED)

def sync_from_percent(buy_price, new_percent) -> dec.Decimal | None:
    """Price that sits new_percent away from buy_price, rounded to 2 places"""
    bp = usable_buy_price(buy_price)
    percent = _number(new_percent)
    if bp is None or percent is None:
        return None
    return round2(bp * (1 + percent / HUNDRED))

def _display(value: dec.Decimal | None) -> str:
    return "" if value is None else str(value)

def on_price_edited(state: TradeFormState, pair: str, value: str) -> TradeFormState:
    """Price field of a pair was edited: store it and recompute the percent"""
    price_field, percent_field = state.pair_fields(pair)
    percent = sync_from_price(state.buy_price, value)
    return dataclasses.replace(state, **{
        price_field: value,
        percent_field: _display(percent),
    })

def on_percent_edited(state: TradeFormState, pair: str, value: str) -> TradeFormState:
    """Percent field of a pair was edited: store it and recompute the price"""
    price_field, percent_field = state.pair_fields(pair)
    changes = {percent_field: value}
    price = sync_from_percent(state.buy_price, value)
    if price is not None:
        changes[price_field] = str(price)
    return dataclasses.replace(state, **changes)

def on_buy_price_edited(state: TradeFormState, value: str) -> TradeFormState:
    """Buy price was edited: it drives both pairs.

    A pair holding a percent gets its price re-derived from that percent;
    a pair holding only a price gets its percent derived. With no usable
    buy price every percent is cleared.
    """
    changes = {"buy_price": value}
    usable = usable_buy_price(value) is not None

    for pair in PAIRS:
        price_field, percent_field = state.pair_fields(pair)
        held_percent = getattr(state, percent_field)
        held_price = getattr(state, price_field)

        if not usable:
            changes[percent_field] = ""
        elif parse_number(held_percent) is not None:
            changes[price_field] = _display(sync_from_percent(value, held_percent))
        elif parse_number(held_price) is not None:
            changes[percent_field] = _display(sync_from_price(value, held_price))

    if not usable:
        logger.debug("Buy price %r is not usable, cleared percent fields", value)
    return dataclasses.replace(state, **changes)
