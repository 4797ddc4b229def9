"""Scenario generators: seeded random trade flow against one pool."""

from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence

from ..core.types import TradeRequest, TradeSide

Scenario = Iterable[tuple[str, TradeRequest]]  # (user_id, request)


def random_trades(
    pool_id: str,
    steps: int,
    n_outcomes: int,
    users: Sequence[str] = ("alice", "bob", "carol"),
    sell_prob: float = 0.25,
    budget_prob: float = 0.5,
    max_amount: float = 50.0,
    favourite_weight: float = 3.0,
    seed: Optional[int] = None,
) -> Scenario:
    """Yield ``steps`` trades. Outcome 0 is the favourite and is picked more often."""
    rng = random.Random(seed)
    weights = [favourite_weight] + [1.0] * (n_outcomes - 1)
    for _ in range(steps):
        user = rng.choice(list(users))
        idx = rng.choices(range(n_outcomes), weights=weights)[0]
        size = round(rng.uniform(1.0, max_amount), 2)
        if rng.random() < sell_prob:
            yield user, TradeRequest(pool_id, idx, TradeSide.SELL, amount=size)
        elif rng.random() < budget_prob:
            yield user, TradeRequest(pool_id, idx, TradeSide.BUY, collateral_budget=size)
        else:
            yield user, TradeRequest(pool_id, idx, TradeSide.BUY, amount=size)
