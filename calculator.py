# ═══════════════════════════════════════════════════════════════════
# calculator.py - Profit/loss, MTF and stop-loss calculations
# ═══════════════════════════════════════════════════════════════════

from __future__ import annotations
import decimal as dec
import logging
from typing import Any, Mapping

from models import TradeFormState, TradeInput, AnalysisResult, MtfResult, StopLossResult
from utils import HUNDRED
from validation import validate

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = dec.Decimal("365")

def calc_baseline(buy_price: dec.Decimal, shares: dec.Decimal, sell_price: dec.Decimal):
    """Cash trade: (invested, sell amount, P&L, P&L %)"""
    total_invested = buy_price * shares
    total_sell_amount = sell_price * shares
    profit_loss = total_sell_amount - total_invested
    profit_loss_percentage = profit_loss / total_invested * HUNDRED
    return total_invested, total_sell_amount, profit_loss, profit_loss_percentage

def calc_interest(borrowed: dec.Decimal, annual_rate_pct: dec.Decimal, days: dec.Decimal) -> dec.Decimal:
    """Simple interest on borrowed capital, prorated daily over a 365 day year"""
    return borrowed * (annual_rate_pct / HUNDRED) * (days / DAYS_PER_YEAR)

def calc_mtf(trade: TradeInput, total_invested: dec.Decimal) -> MtfResult:
    """Leveraged position funded partly by the broker"""
    margin = trade.margin_multiplier
    buying_power = total_invested * margin
    # always equals total_invested while buying power is a fixed multiple
    required_margin = buying_power / margin
    shares = buying_power / trade.buy_price
    borrowed = buying_power - required_margin
    interest_cost = calc_interest(borrowed, trade.broker_interest_rate, trade.holding_period_days)

    sell_amount = shares * trade.mtf_target_price
    gross = sell_amount - buying_power
    net = gross - interest_cost

    return MtfResult(
        buying_power=buying_power,
        required_margin=required_margin,
        shares=shares,
        borrowed_amount=borrowed,
        interest_cost=interest_cost,
        sell_amount=sell_amount,
        gross_profit_loss=gross,
        net_profit_loss=net,
        # against the trader's own deposit, not the leveraged buying power
        profit_loss_percentage=net / required_margin * HUNDRED,
        break_even_price=trade.buy_price + interest_cost / shares,
    )

def calc_stop_loss(buy_price: dec.Decimal, shares: dec.Decimal, stop_loss_price: dec.Decimal) -> StopLossResult:
    move = stop_loss_price - buy_price
    return StopLossResult(
        amount=move * shares,
        percentage=move / buy_price * HUNDRED,
    )

def calculate(trade: TradeInput) -> AnalysisResult:
    """Compute the full analysis for an already validated trade"""
    invested, sell_amount, pnl, pnl_pct = calc_baseline(trade.buy_price, trade.shares, trade.sell_price)

    mtf = calc_mtf(trade, invested) if trade.mtf_enabled else None

    stop_loss = None
    if trade.stop_loss_price is not None:
        stop_loss = calc_stop_loss(trade.buy_price, trade.shares, trade.stop_loss_price)

    result = AnalysisResult(
        total_invested=invested,
        total_sell_amount=sell_amount,
        profit_loss=pnl,
        profit_loss_percentage=pnl_pct,
        mtf=mtf,
        stop_loss=stop_loss,
    )
    logger.debug("Analysis for %s: %s", trade.stock_name, result)
    return result

def analyze(fields: TradeFormState | Mapping[str, Any]) -> AnalysisResult:
    """Validate raw fields and calculate; raises TradeValidationError on bad input"""
    trade = validate(fields).raise_for_errors()
    return calculate(trade)
