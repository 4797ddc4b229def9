"""Small numeric utilities."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .errors import NumericalInstabilityError


def safe_div(n: float, d: float, default: Optional[float] = None) -> Optional[float]:
    if d == 0:
        return default
    return n / d


def require_finite(values: Sequence[float], what: str = "shares") -> None:
    for i, v in enumerate(values):
        if not math.isfinite(v):
            raise NumericalInstabilityError(f"{what}[{i}] is not finite: {v!r}")


def check_finite(x: float, what: str) -> float:
    """Return ``x`` unchanged, raising if it is NaN or infinite."""
    if not math.isfinite(x):
        raise NumericalInstabilityError(f"{what} is not finite: {x!r}")
    return x
