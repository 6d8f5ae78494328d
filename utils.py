# ═══════════════════════════════════════════════════════════════════
# utils.py - Decimal parsing and rounding helpers
# ═══════════════════════════════════════════════════════════════════

import decimal as dec

TWO_PLACES = dec.Decimal("0.01")
HUNDRED = dec.Decimal("100")

# Supported magnitudes for non-zero inputs, 1e-20 up to (but excluding) 1e41
MIN_EXPONENT = -20
MAX_EXPONENT = 40

def to_decimal(v: str | int | float | dec.Decimal | None) -> dec.Decimal | None:
    """Convert value to Decimal, handling None and existing Decimals"""
    if v is None or isinstance(v, dec.Decimal):
        return v
    if isinstance(v, float):
        return dec.Decimal(str(v))
    return dec.Decimal(v)

def parse_number(value) -> dec.Decimal | None:
    """Parse a raw field value into a finite Decimal, or None if it isn't numeric"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = to_decimal(value)
    except (dec.InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite():
        return None
    return number

def in_range(number: dec.Decimal) -> bool:
    """True when a parsed number is zero or within the supported magnitudes"""
    if number.is_zero():
        return True
    return MIN_EXPONENT <= number.adjusted() <= MAX_EXPONENT

def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def round2(value: dec.Decimal) -> dec.Decimal:
    """Round to two decimal places, halves away from zero"""
    with dec.localcontext() as ctx:
        # room for every integer digit plus two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(TWO_PLACES, rounding=dec.ROUND_HALF_UP)
    # avoid displaying "-0.00"
    return rounded.copy_abs() if rounded.is_zero() else rounded
