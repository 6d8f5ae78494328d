# ═══════════════════════════════════════════════════════════════════
# models.py - Core data models
# ═══════════════════════════════════════════════════════════════════

from __future__ import annotations
import decimal as dec
from dataclasses import dataclass, field

SELL = "sell"
MTF = "mtf"

# Form field names, used as keys in validation error maps
FIELDS = (
    "stock_name",
    "buy_price",
    "shares",
    "sell_price",
    "sell_percent",
    "mtf_enabled",
    "margin_multiplier",
    "mtf_target_price",
    "mtf_target_percent",
    "holding_period_days",
    "broker_interest_rate",
    "stop_loss_price",
)

@dataclass
class TradeFormState:
    """Raw field values exactly as the user typed them"""
    stock_name: str = ""
    buy_price: str = ""
    shares: str = ""
    sell_price: str = ""
    sell_percent: str = ""
    mtf_enabled: bool = False
    margin_multiplier: str = "2.5"
    mtf_target_price: str = ""
    mtf_target_percent: str = ""
    holding_period_days: str = "7"
    broker_interest_rate: str = "12"
    stop_loss_price: str = ""

    @classmethod
    def from_defaults(cls, cfg: dict | None = None, **values) -> TradeFormState:
        """Build a form pre-filled with the configured MTF defaults"""
        defaults = (cfg or {}).get("defaults", {})
        for key in ("margin_multiplier", "holding_period_days", "broker_interest_rate"):
            if key in defaults and key not in values:
                values[key] = str(defaults[key])
        return cls(**values)

    def pair_fields(self, pair: str) -> tuple[str, str]:
        """Attribute names (price, percent) of a synchronized pair"""
        if pair == SELL:
            return "sell_price", "sell_percent"
        if pair == MTF:
            return "mtf_target_price", "mtf_target_percent"
        raise ValueError(f"Unknown price pair: {pair!r}")

@dataclass(frozen=True)
class TradeInput:
    stock_name: str
    buy_price: dec.Decimal
    shares: dec.Decimal
    sell_price: dec.Decimal
    mtf_enabled: bool = False
    margin_multiplier: dec.Decimal | None = None
    mtf_target_price: dec.Decimal | None = None
    holding_period_days: dec.Decimal | None = None
    broker_interest_rate: dec.Decimal | None = None  # annual, in percent
    stop_loss_price: dec.Decimal | None = None

@dataclass(frozen=True)
class MtfResult:
    """Leveraged position economics under a margin trading facility"""
    buying_power: dec.Decimal
    required_margin: dec.Decimal
    shares: dec.Decimal
    borrowed_amount: dec.Decimal
    interest_cost: dec.Decimal
    sell_amount: dec.Decimal
    gross_profit_loss: dec.Decimal
    net_profit_loss: dec.Decimal
    profit_loss_percentage: dec.Decimal
    break_even_price: dec.Decimal

@dataclass(frozen=True)
class StopLossResult:
    amount: dec.Decimal
    percentage: dec.Decimal

@dataclass(frozen=True)
class AnalysisResult:
    total_invested: dec.Decimal
    total_sell_amount: dec.Decimal
    profit_loss: dec.Decimal
    profit_loss_percentage: dec.Decimal
    mtf: MtfResult | None = None
    stop_loss: StopLossResult | None = None

    def is_profit(self) -> bool:
        return self.profit_loss > 0

class TradeValidationError(ValueError):
    """One or more form fields failed validation"""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{name}: {reason}" for name, reason in self.errors.items())
        super().__init__(f"Invalid trade input ({detail})")

@dataclass
class ValidationOutcome:
    trade: TradeInput | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.trade is not None and not self.errors

    def raise_for_errors(self) -> TradeInput:
        """Return the validated trade or raise TradeValidationError"""
        if not self.ok:
            raise TradeValidationError(self.errors)
        return self.trade
