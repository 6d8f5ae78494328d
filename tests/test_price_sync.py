import pytest
from decimal import Decimal

from models import TradeFormState, SELL, MTF
from price_sync import (
    sync_from_price,
    sync_from_percent,
    on_price_edited,
    on_percent_edited,
    on_buy_price_edited,
)

def test_sync_from_price():
    assert sync_from_price("100", "110") == Decimal("10.00")
    assert sync_from_price("100", "90") == Decimal("-10.00")
    assert sync_from_price("3", "4") == Decimal("33.33")

def test_sync_from_percent():
    assert sync_from_percent("100", "10") == Decimal("110.00")
    assert sync_from_percent("250", "-4") == Decimal("240.00")
    assert sync_from_percent("33.33", "15") == Decimal("38.33")

@pytest.mark.parametrize("buy", ["0", "", "-1", "abc", None])
def test_unusable_buy_price_leaves_result_unset(buy):
    assert sync_from_price(buy, "110") is None
    assert sync_from_percent(buy, "10") is None

def test_non_numeric_target_is_unset():
    assert sync_from_price("100", "") is None
    assert sync_from_percent("100", "x") is None

def test_no_negative_zero():
    assert str(sync_from_price("100", "99.999")) == "0.00"

@pytest.mark.parametrize("buy,price", [
    ("100", "110"),
    ("1234.56", "987.65"),
    ("3", "4"),
    ("0.75", "1.2"),
    ("2500", "2612.35"),
])
def test_round_trip_within_rounding(buy, price):
    percent = sync_from_price(buy, price)
    back = sync_from_percent(buy, percent)
    tolerance = Decimal(buy) * Decimal("0.00005") + Decimal("0.01")
    assert abs(back - Decimal(price)) <= tolerance

def test_price_edit_updates_percent():
    state = TradeFormState(buy_price="100")
    state = on_price_edited(state, SELL, "125")
    assert state.sell_price == "125"
    assert state.sell_percent == "25.00"

def test_percent_edit_updates_price():
    state = TradeFormState(buy_price="100")
    state = on_percent_edited(state, SELL, "7.5")
    assert state.sell_percent == "7.5"
    assert state.sell_price == "107.50"

def test_price_edit_without_buy_price_clears_percent():
    state = TradeFormState(sell_percent="10")
    state = on_price_edited(state, SELL, "110")
    assert state.sell_price == "110"
    assert state.sell_percent == ""

def test_percent_edit_without_buy_price_keeps_price():
    state = TradeFormState(buy_price="0", sell_price="110")
    state = on_percent_edited(state, SELL, "20")
    assert state.sell_percent == "20"
    assert state.sell_price == "110"

def test_pairs_are_independent():
    state = TradeFormState(buy_price="100", sell_price="110", sell_percent="10.00")
    state = on_price_edited(state, MTF, "120")
    assert state.mtf_target_percent == "20.00"
    assert state.sell_price == "110"
    assert state.sell_percent == "10.00"

    state = on_percent_edited(state, SELL, "5")
    assert state.sell_price == "105.00"
    assert state.mtf_target_price == "120"
    assert state.mtf_target_percent == "20.00"

def test_transitions_do_not_mutate_input():
    state = TradeFormState(buy_price="100")
    on_price_edited(state, SELL, "110")
    assert state.sell_price == ""

def test_buy_price_edit_rederives_price_from_percent():
    state = TradeFormState(buy_price="100")
    state = on_percent_edited(state, SELL, "10")
    state = on_percent_edited(state, MTF, "15")
    state = on_buy_price_edited(state, "200")
    assert state.sell_price == "220.00"
    assert state.sell_percent == "10"
    assert state.mtf_target_price == "230.00"

def test_buy_price_edit_derives_percent_when_only_price_held():
    state = TradeFormState(sell_price="110")
    state = on_buy_price_edited(state, "100")
    assert state.sell_percent == "10.00"
    assert state.sell_price == "110"

def test_buy_price_cleared_clears_percents():
    state = TradeFormState(buy_price="100", sell_price="110", sell_percent="10.00",
                           mtf_target_price="120", mtf_target_percent="20.00")
    state = on_buy_price_edited(state, "")
    assert state.buy_price == ""
    assert state.sell_percent == ""
    assert state.mtf_target_percent == ""
    assert state.sell_price == "110"
    assert state.mtf_target_price == "120"

def test_unknown_pair():
    with pytest.raises(ValueError):
        on_price_edited(TradeFormState(), "stop", "1")

def test_thirty_digit_target_price():
    percent = sync_from_price("1", "1" + "0" * 30)
    assert percent is not None
    assert percent > Decimal("9.9e31")
    assert str(percent).endswith(".00")

def test_huge_price_edit_sets_percent():
    state = on_price_edited(TradeFormState(buy_price="0.01"), SELL, "1" + "0" * 26)
    assert state.sell_percent.endswith(".00")
    assert Decimal(state.sell_percent) > Decimal("9.9e29")

@pytest.mark.parametrize("value", ["1e999999", "1e-500000", "1e41"])
def test_out_of_range_numbers_leave_result_unset(value):
    assert sync_from_price("100", value) is None
    assert sync_from_percent("100", value) is None
    assert sync_from_price(value, "100") is None
