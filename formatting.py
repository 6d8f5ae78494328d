# ═══════════════════════════════════════════════════════════════════
# formatting.py - Currency/percent strings and the result table
# ═══════════════════════════════════════════════════════════════════

import decimal as dec
from rich.markup import escape
from rich.table import Table

from models import AnalysisResult
from utils import round2

def group_digits(digits: str, grouping: str = "indian") -> str:
    """Insert thousands separators; indian grouping is 3 then 2,2,..."""
    if grouping == "western" or len(digits) <= 3:
        return f"{int(digits):,}"
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])

def format_currency(amount: dec.Decimal, symbol: str = "₹", grouping: str = "indian") -> str:
    rounded = round2(dec.Decimal(amount))
    sign = "-" if rounded < 0 else ""
    whole, _, fraction = f"{abs(rounded):.2f}".partition(".")
    return f"{sign}{symbol}{group_digits(whole, grouping)}.{fraction}"

def format_percent(value: dec.Decimal) -> str:
    return f"{round2(dec.Decimal(value)):.2f}%"

def format_price(value: dec.Decimal) -> str:
    return f"{round2(dec.Decimal(value)):.2f}"

def pnl_color(value: dec.Decimal) -> str:
    return "green" if value >= 0 else "red"

def result_rows(result: AnalysisResult, cfg: dict | None = None):
    """(label, display value, color or None) for every metric in the result"""
    display = (cfg or {}).get("display", {})
    symbol = display.get("currency_symbol", "₹")
    grouping = display.get("grouping", "indian")

    def money(v):
        return format_currency(v, symbol, grouping)

    rows = [
        ("Total Invested", money(result.total_invested), None),
        ("Total Sell", money(result.total_sell_amount), None),
        ("Profit/Loss",
         f"{money(result.profit_loss)} ({format_percent(result.profit_loss_percentage)})",
         pnl_color(result.profit_loss)),
    ]

    if result.stop_loss is not None:
        sl = result.stop_loss
        rows.append(("Stop Loss Impact",
                     f"{money(sl.amount)} ({format_percent(sl.percentage)})",
                     pnl_color(sl.amount)))

    if result.mtf is not None:
        mtf = result.mtf
        rows.extend([
            ("Required Margin", money(mtf.required_margin), None),
            ("Buying Power", money(mtf.buying_power), None),
            ("MTF Shares", format_price(mtf.shares), None),
            ("Borrowed", money(mtf.borrowed_amount), None),
            ("Interest Cost", money(mtf.interest_cost), "yellow"),
            ("MTF Gross Profit", money(mtf.gross_profit_loss), pnl_color(mtf.gross_profit_loss)),
            ("MTF Net Profit",
             f"{money(mtf.net_profit_loss)} ({format_percent(mtf.profit_loss_percentage)})",
             pnl_color(mtf.net_profit_loss)),
            ("Break Even", format_price(mtf.break_even_price), None),
        ])

    return rows

def build_result_table(stock_name: str, result: AnalysisResult, cfg: dict | None = None) -> Table:
    tbl = Table(title=f"Results for {escape(stock_name)}")
    tbl.add_column("Metric", justify="left")
    tbl.add_column("Value", justify="right")

    for label, value, color in result_rows(result, cfg):
        tbl.add_row(label, f"[{color}]{value}[/]" if color else value)

    return tbl

def result_to_dict(result: AnalysisResult) -> dict:
    """Plain dict with string amounts, suitable for JSON output"""
    def plain(obj):
        return {k: str(v) for k, v in vars(obj).items()}

    data = {
        "total_invested": str(result.total_invested),
        "total_sell_amount": str(result.total_sell_amount),
        "profit_loss": str(result.profit_loss),
        "profit_loss_percentage": str(result.profit_loss_percentage),
        "mtf": plain(result.mtf) if result.mtf is not None else None,
        "stop_loss": plain(result.stop_loss) if result.stop_loss is not None else None,
    }
    return data
