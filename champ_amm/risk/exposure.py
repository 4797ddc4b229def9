"""Operator exposure for LMSR pools."""

from __future__ import annotations

import math
from typing import Sequence

from ..core.errors import InvalidLiquidityError


def max_subsidy(b: float, n_outcomes: int) -> float:
    """Worst-case loss the market maker can subsidise: b * ln(n)."""
    if not b > 0:
        raise InvalidLiquidityError(b)
    if n_outcomes <= 1:
        return 0.0
    return b * math.log(n_outcomes)


def entropy(probs: Sequence[float]) -> float:
    eps = 1e-12
    return -sum(p * math.log(max(p, eps)) for p in probs if p > 0)
