"""Read-model projections of pool prices for display and pre-trade checks."""

from __future__ import annotations

from typing import Iterable, List, Protocol

from . import lmsr
from ..core.types import OutcomePrice, Pool, PoolSummary
from ..risk.exposure import entropy, max_subsidy


class _HasShares(Protocol):
    participant_id: str
    shares_outstanding: float


def pool_prices(outcomes: Iterable[_HasShares], b: float) -> List[OutcomePrice]:
    outcomes = list(outcomes)
    ps = lmsr.prices([o.shares_outstanding for o in outcomes], b)
    return [
        OutcomePrice(o.participant_id, o.shares_outstanding, p)
        for o, p in zip(outcomes, ps)
    ]


def pool_summary(pool: Pool) -> PoolSummary:
    rows = pool_prices(pool.outcomes, pool.b)
    return PoolSummary(
        pool_id=pool.id,
        status=pool.status,
        b=pool.b,
        total_collateral=pool.total_collateral,
        outcomes=rows,
        max_subsidy=max_subsidy(pool.b, len(rows)),
        entropy=entropy([r.price for r in rows]),
    )
