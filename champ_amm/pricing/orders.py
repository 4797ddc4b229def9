"""Pre-trade validation for buys and sells.

Read-only: nothing here mutates the share vector. Callers commit the delta
only after validation passes against the pool's current (locked) state.
"""

from __future__ import annotations

from typing import Sequence

from . import lmsr
from ..core.types import BuyValidation, SellValidation

AMOUNT_NOT_POSITIVE = "Amount must be positive"
INVALID_INDEX = "Invalid outcome index"
INSUFFICIENT_BALANCE = "Insufficient balance"
INSUFFICIENT_SHARES = "Insufficient shares"
NEGATIVE_OUTSTANDING = "Sell exceeds outstanding shares"


def validate_buy_order(
    shares: Sequence[float],
    b: float,
    index: int,
    amount: float,
    user_balance: float,
) -> BuyValidation:
    if not amount > 0:
        return BuyValidation(False, 0.0, 0.0, AMOUNT_NOT_POSITIVE)
    if not 0 <= index < len(shares):
        return BuyValidation(False, 0.0, 0.0, INVALID_INDEX)

    cost = lmsr.cost_for_shares(shares, b, index, amount)
    if not cost <= user_balance:
        # cost is still reported so the caller can display it
        return BuyValidation(False, cost, 0.0, INSUFFICIENT_BALANCE)

    after = list(shares)
    after[index] += amount
    return BuyValidation(True, cost, lmsr.price(after, b, index))


def validate_sell_order(
    shares: Sequence[float],
    b: float,
    index: int,
    amount: float,
    shares_held: float,
    allow_negative_outstanding: bool = False,
) -> SellValidation:
    """Validate selling ``amount`` shares of outcome ``index`` back to the pool.

    ``shares_held`` is what the seller personally owns. Unless
    ``allow_negative_outstanding`` is set, a sell may not take the pool-wide
    count for the outcome below zero either.
    """
    if not amount > 0:
        return SellValidation(False, 0.0, 0.0, AMOUNT_NOT_POSITIVE)
    if not 0 <= index < len(shares):
        return SellValidation(False, 0.0, 0.0, INVALID_INDEX)

    proceeds = -lmsr.cost_for_shares(shares, b, index, -amount)
    if amount > shares_held:
        return SellValidation(False, proceeds, 0.0, INSUFFICIENT_SHARES)
    if not allow_negative_outstanding and shares[index] - amount < 0:
        return SellValidation(False, proceeds, 0.0, NEGATIVE_OUTSTANDING)

    after = list(shares)
    after[index] -= amount
    return SellValidation(True, proceeds, lmsr.price(after, b, index))


def quote_for_budget(
    shares: Sequence[float],
    b: float,
    index: int,
    collateral: float,
    tolerance: float = lmsr.DEFAULT_TOLERANCE,
    bracket_multiplier: float = lmsr.DEFAULT_BRACKET_MULTIPLIER,
    max_iterations: int = lmsr.DEFAULT_MAX_ITERATIONS,
) -> tuple[float, BuyValidation]:
    """Shares a ``collateral`` budget buys, validated as a buy of that size."""
    if not 0 <= index < len(shares):
        return 0.0, BuyValidation(False, 0.0, 0.0, INVALID_INDEX)
    amount = lmsr.shares_for_cost(
        shares,
        b,
        index,
        collateral,
        tolerance=tolerance,
        bracket_multiplier=bracket_multiplier,
        max_iterations=max_iterations,
    )
    return amount, validate_buy_order(shares, b, index, amount, collateral)
