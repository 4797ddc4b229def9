import pytest

from champ_amm.pricing import lmsr
from champ_amm.pricing.orders import (
    quote_for_budget,
    validate_buy_order,
    validate_sell_order,
)


def test_buy_rejects_non_positive_amount_before_index():
    for amount in (0.0, -1.0, float("nan")):
        v = validate_buy_order([0.0, 0.0], 100.0, 7, amount, 100.0)
        assert not v.valid
        assert v.error == "Amount must be positive"
        assert v.cost == 0.0 and v.new_price == 0.0


def test_buy_rejects_invalid_index():
    for idx in (-1, 2):
        v = validate_buy_order([0.0, 0.0], 100.0, idx, 5.0, 100.0)
        assert not v.valid
        assert v.error == "Invalid outcome index"


def test_buy_insufficient_balance_still_reports_cost():
    v = validate_buy_order([0.0, 0.0], 100.0, 0, 50.0, 10.0)
    assert not v.valid
    assert v.error == "Insufficient balance"
    assert v.cost == pytest.approx(lmsr.cost_for_shares([0.0, 0.0], 100.0, 0, 50.0))
    assert v.new_price == 0.0


def test_valid_buy_reports_post_trade_price_without_mutating():
    shares = [0.0, 0.0]
    v = validate_buy_order(shares, 100.0, 0, 50.0, 100.0)
    assert v.valid and v.error is None
    assert v.new_price == pytest.approx(lmsr.price([50.0, 0.0], 100.0, 0))
    assert v.new_price > 0.5
    assert shares == [0.0, 0.0]


def test_budget_quote_then_validate_is_affordable():
    amount = lmsr.shares_for_cost([0.0, 0.0], 100.0, 0, 10.0)
    v = validate_buy_order([0.0, 0.0], 100.0, 0, amount, 10.0)
    assert v.valid
    assert v.cost <= 10.0


def test_quote_for_budget():
    amount, v = quote_for_budget([0.0, 0.0], 100.0, 0, 10.0)
    # closed form for two outcomes at zero: 100 * ln(2 * e^0.1 - 1)
    assert amount == pytest.approx(19.0902, abs=1e-3)
    assert v.valid and v.cost <= 10.0


def test_quote_for_budget_invalid_index():
    amount, v = quote_for_budget([0.0, 0.0], 100.0, 3, 10.0)
    assert amount == 0.0
    assert v.error == "Invalid outcome index"


def test_valid_sell_returns_proceeds_and_lower_price():
    shares = [20.0, 0.0]
    v = validate_sell_order(shares, 100.0, 0, 5.0, shares_held=10.0)
    assert v.valid
    assert v.proceeds == pytest.approx(-lmsr.cost_for_shares(shares, 100.0, 0, -5.0))
    assert v.proceeds > 0
    assert v.new_price < lmsr.price(shares, 100.0, 0)
    assert shares == [20.0, 0.0]


def test_sell_more_than_held_is_rejected():
    v = validate_sell_order([20.0, 0.0], 100.0, 0, 15.0, shares_held=10.0)
    assert not v.valid
    assert v.error == "Insufficient shares"


def test_sell_below_zero_outstanding_is_a_policy():
    v = validate_sell_order([5.0, 0.0], 100.0, 0, 8.0, shares_held=10.0)
    assert not v.valid
    assert v.error == "Sell exceeds outstanding shares"

    v = validate_sell_order(
        [5.0, 0.0], 100.0, 0, 8.0, shares_held=10.0, allow_negative_outstanding=True
    )
    assert v.valid
    assert v.proceeds > 0


def test_sell_rejects_bad_amount_and_index():
    assert validate_sell_order([5.0, 0.0], 100.0, 0, 0.0, 10.0).error == "Amount must be positive"
    assert validate_sell_order([5.0, 0.0], 100.0, 9, 1.0, 10.0).error == "Invalid outcome index"


def test_buy_with_nan_balance_is_rejected():
    v = validate_buy_order([0.0, 0.0], 100.0, 0, 5.0, float("nan"))
    assert not v.valid
    assert v.error == "Insufficient balance"
    assert v.cost > 0
