import pytest
from decimal import Decimal

from models import TradeInput, TradeValidationError
from calculator import calculate, analyze, calc_interest

def D(value):
    return Decimal(str(value))

def trade(**overrides):
    values = dict(stock_name="INFY", buy_price=D(100), shares=D(10), sell_price=D(110))
    values.update(overrides)
    return TradeInput(**values)

def mtf_trade(**overrides):
    values = dict(
        mtf_enabled=True,
        margin_multiplier=D("2.5"),
        mtf_target_price=D(115),
        holding_period_days=D(7),
        broker_interest_rate=D(12),
    )
    values.update(overrides)
    return trade(**values)

def test_baseline_scenario():
    result = calculate(trade())
    assert result.total_invested == 1000
    assert result.total_sell_amount == 1100
    assert result.profit_loss == 100
    assert result.profit_loss_percentage == 10
    assert result.mtf is None
    assert result.stop_loss is None
    assert result.is_profit()

@pytest.mark.parametrize("buy,shares,sell", [
    ("100", "10", "90"),
    ("1234.5", "3", "1300.25"),
    ("0.35", "10000", "0.41"),
    ("2500", "1.5", "2500"),
])
def test_baseline_identities(buy, shares, sell):
    result = calculate(trade(buy_price=D(buy), shares=D(shares), sell_price=D(sell)))
    expected = (D(sell) - D(buy)) * D(shares)
    assert result.profit_loss == expected
    assert result.profit_loss_percentage == expected / (D(buy) * D(shares)) * 100

def test_mtf_scenario():
    mtf = calculate(mtf_trade()).mtf
    assert mtf.buying_power == 2500
    assert mtf.required_margin == 1000
    assert mtf.shares == 25
    assert mtf.borrowed_amount == 1500
    assert float(mtf.interest_cost) == pytest.approx(1500 * 0.12 * 7 / 365)
    assert float(mtf.interest_cost) == pytest.approx(3.4520548, abs=1e-6)
    assert mtf.sell_amount == 2875
    assert mtf.gross_profit_loss == 375
    assert float(mtf.net_profit_loss) == pytest.approx(371.5479452, abs=1e-6)
    assert float(mtf.profit_loss_percentage) == pytest.approx(37.15479452, abs=1e-6)
    assert float(mtf.break_even_price) == pytest.approx(100.1380822, abs=1e-6)

def test_mtf_does_not_change_baseline():
    plain = calculate(trade())
    leveraged = calculate(mtf_trade())
    assert leveraged.profit_loss == plain.profit_loss
    assert leveraged.total_invested == plain.total_invested

@pytest.mark.parametrize("margin", ["1.01", "2", "2.5", "3", "7", "4.75"])
def test_required_margin_equals_invested(margin):
    result = calculate(mtf_trade(margin_multiplier=D(margin), buy_price=D("123.45"), shares=D(7)))
    assert result.mtf.required_margin == result.total_invested

def test_net_percentage_is_against_required_margin():
    mtf = calculate(mtf_trade()).mtf
    assert mtf.profit_loss_percentage == mtf.net_profit_loss / mtf.required_margin * 100

def test_break_even_sells_at_zero_net():
    mtf = calculate(mtf_trade()).mtf
    at_break_even = calculate(mtf_trade(mtf_target_price=mtf.break_even_price)).mtf
    assert float(at_break_even.net_profit_loss) == pytest.approx(0, abs=1e-9)

def test_interest_only_loss():
    mtf = calculate(mtf_trade(mtf_target_price=D(100))).mtf
    assert mtf.gross_profit_loss == 0
    assert mtf.net_profit_loss == -mtf.interest_cost
    assert mtf.net_profit_loss < 0

def test_interest_prorates_daily():
    assert calc_interest(D(1000), D(10), D(365)) == 100
    assert calc_interest(D(1000), D(10), D(73)) == 20

def test_stop_loss_scenario():
    sl = calculate(trade(stop_loss_price=D(90))).stop_loss
    assert sl.amount == -100
    assert sl.percentage == -10

@pytest.mark.parametrize("stop", ["50", "99.99", "100", "100.01", "150", "0"])
def test_stop_loss_sign_matches_move(stop):
    sl = calculate(trade(stop_loss_price=D(stop))).stop_loss
    move = D(stop) - D(100)
    for value in (sl.amount, sl.percentage):
        assert (value > 0) == (move > 0)
        assert (value < 0) == (move < 0)

def test_stop_loss_independent_of_mtf():
    plain = calculate(trade(stop_loss_price=D(95))).stop_loss
    leveraged = calculate(mtf_trade(stop_loss_price=D(95))).stop_loss
    assert plain == leveraged

def test_calculate_is_deterministic():
    assert calculate(mtf_trade(stop_loss_price=D(92))) == calculate(mtf_trade(stop_loss_price=D(92)))

def test_analyze_runs_the_pipeline():
    result = analyze({
        "stock_name": "INFY",
        "buy_price": "100",
        "shares": "10",
        "sell_price": "110",
        "stop_loss_price": "90",
    })
    assert result.profit_loss == 100
    assert result.stop_loss.amount == -100

def test_analyze_rejects_invalid_input():
    with pytest.raises(TradeValidationError) as excinfo:
        analyze({"stock_name": "INFY", "buy_price": "0", "shares": "10", "sell_price": "110"})
    assert list(excinfo.value.errors) == ["buy_price"]

def test_extreme_valid_inputs_calculate():
    result = analyze({
        "stock_name": "BIG",
        "buy_price": "1e-20",
        "shares": "1e-20",
        "sell_price": "9e40",
        "stop_loss_price": "1e40",
        "mtf_enabled": True,
        "margin_multiplier": "1e40",
        "mtf_target_price": "1e40",
        "holding_period_days": "1e40",
        "broker_interest_rate": "1e40",
    })
    assert result.total_invested > 0
    assert result.mtf.required_margin == result.total_invested
