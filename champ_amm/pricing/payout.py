"""Resolution payout: the whole pool's collateral is split pro rata among
holders of the winning outcome."""

from __future__ import annotations

from typing import Dict

from ..core.errors import PoolError
from ..core.types import Pool
from ..state.ledger import PositionLedger


def potential_payout(
    shares_owned: float, total_winning_shares: float, total_collateral: float
) -> float:
    if total_winning_shares <= 0:
        return 0.0
    return (shares_owned / total_winning_shares) * total_collateral


def settle(pool: Pool, ledger: PositionLedger) -> Dict[str, float]:
    """Payout per user for a concluded pool. Losing outcomes pay nothing."""
    if pool.is_active or pool.winning_index is None:
        raise PoolError(f"pool {pool.id!r} has not been concluded")
    idx = pool.winning_index
    total_winning = pool.outcomes[idx].shares_outstanding
    return {
        user_id: potential_payout(held, total_winning, pool.total_collateral)
        for user_id, held in ledger.holders(pool.id, idx).items()
    }
