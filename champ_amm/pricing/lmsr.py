"""LMSR (Logarithmic Market Scoring Rule) pricing for N outcomes.

Cost function: C(q) = b * log(sum_i exp(q_i / b))
Marginal price p_i = exp(q_i / b) / sum_j exp(q_j / b)

The module-level functions are pure: every call gets the full share vector and
``b``. ``LMSR`` binds ``b`` (and the search settings) for callers that price
one pool repeatedly; it delegates here so there is a single code path.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import structlog

from .base import PricingModel
from ..core.config import Settings
from ..core.errors import (
    InvalidAmountError,
    InvalidLiquidityError,
    InvalidOutcomeIndexError,
)
from ..core.utils import check_finite, require_finite, safe_div
from ..io import metrics

logger = structlog.get_logger(__name__)

DEFAULT_TOLERANCE = 1e-4
DEFAULT_BRACKET_MULTIPLIER = 100.0
DEFAULT_MAX_ITERATIONS = 200


def _validate_b(b: float) -> None:
    if not (b > 0 and math.isfinite(b)):
        raise InvalidLiquidityError(b)


def _validate_index(shares: Sequence[float], index: int) -> None:
    if not 0 <= index < len(shares):
        raise InvalidOutcomeIndexError(index, len(shares))


def _scaled_exps(shares: Sequence[float], b: float) -> tuple[float, List[float]]:
    # numerical stability: subtract max before exponentiating
    scaled = [q / b for q in shares]
    m = max(scaled)
    check_finite(m, "max(q / b)")
    return m, [math.exp(x - m) for x in scaled]


def cost(shares: Sequence[float], b: float) -> float:
    _validate_b(b)
    if not shares:
        return 0.0
    require_finite(shares)
    m, exps = _scaled_exps(shares, b)
    return check_finite(b * (m + math.log(sum(exps))), "cost")


def prices(shares: Sequence[float], b: float) -> List[float]:
    _validate_b(b)
    if not shares:
        return []
    require_finite(shares)
    _, exps = _scaled_exps(shares, b)
    denom = sum(exps)
    return [check_finite(e / denom, "price") for e in exps]


def price(shares: Sequence[float], b: float, index: int) -> float:
    _validate_index(shares, index)
    return prices(shares, b)[index]


def cost_for_shares(shares: Sequence[float], b: float, index: int, amount: float) -> float:
    """Collateral owed for adding ``amount`` shares of outcome ``index``.

    Negative ``amount`` is a sell and yields a negative cost (money returned).
    No floor is applied to the resulting share count here.
    """
    _validate_b(b)
    _validate_index(shares, index)
    if not math.isfinite(amount):
        raise InvalidAmountError(f"amount must be finite, got {amount!r}")
    if amount == 0:
        return 0.0
    after = list(shares)
    after[index] += amount
    return cost(after, b) - cost(shares, b)


def shares_for_cost(
    shares: Sequence[float],
    b: float,
    index: int,
    collateral: float,
    tolerance: float = DEFAULT_TOLERANCE,
    bracket_multiplier: float = DEFAULT_BRACKET_MULTIPLIER,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """Largest share amount whose cost does not exceed ``collateral``.

    Bisects on ``[0, collateral * bracket_multiplier]``. The default multiplier
    assumes the marginal price of ``index`` never drops below 0.01; a result
    pinned to the upper bound means the bracket was too narrow and is logged.
    """
    _validate_b(b)
    _validate_index(shares, index)
    if not math.isfinite(collateral):
        raise InvalidAmountError(f"collateral must be finite, got {collateral!r}")
    if collateral <= 0:
        return 0.0

    low = 0.0
    high = upper = collateral * bracket_multiplier
    check_finite(upper, "search upper bound")
    iterations = 0
    while high - low > tolerance and iterations < max_iterations:
        mid = (low + high) / 2
        if mid <= low or mid >= high:
            # float resolution exhausted
            break
        if cost_for_shares(shares, b, index, mid) < collateral:
            low = mid
        else:
            high = mid
        iterations += 1

    if upper > tolerance and upper - low <= tolerance:
        metrics.inc_search_saturation()
        logger.warning(
            "search_bracket_saturated",
            index=index,
            collateral=collateral,
            upper_bound=upper,
            price=price(shares, b, index),
        )
    return low


def average_price(shares: Sequence[float], b: float, index: int, amount: float) -> float:
    if amount == 0:
        return 0.0
    return safe_div(cost_for_shares(shares, b, index, amount), amount, 0.0)


class LMSR(PricingModel):
    def __init__(
        self,
        b: float = 100.0,
        tolerance: float = DEFAULT_TOLERANCE,
        bracket_multiplier: float = DEFAULT_BRACKET_MULTIPLIER,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        _validate_b(b)
        self.b = b
        self.tolerance = tolerance
        self.bracket_multiplier = bracket_multiplier
        self.max_iterations = max_iterations

    @classmethod
    def from_settings(cls, b: Optional[float], settings: Settings) -> "LMSR":
        return cls(
            b=settings.default_liquidity if b is None else b,
            tolerance=settings.search_tolerance,
            bracket_multiplier=settings.search_bracket_multiplier,
            max_iterations=settings.search_max_iterations,
        )

    def prices(self, quantities: Sequence[float]) -> List[float]:
        return prices(quantities, self.b)

    def cost(self, quantities: Sequence[float]) -> float:
        return cost(quantities, self.b)

    def price(self, quantities: Sequence[float], index: int) -> float:
        return price(quantities, self.b, index)

    def cost_for_shares(self, quantities: Sequence[float], index: int, amount: float) -> float:
        return cost_for_shares(quantities, self.b, index, amount)

    def shares_for_cost(self, quantities: Sequence[float], index: int, collateral: float) -> float:
        return shares_for_cost(
            quantities,
            self.b,
            index,
            collateral,
            tolerance=self.tolerance,
            bracket_multiplier=self.bracket_multiplier,
            max_iterations=self.max_iterations,
        )

    def average_price(self, quantities: Sequence[float], index: int, amount: float) -> float:
        return average_price(quantities, self.b, index, amount)
