"""In-memory pool store: pool id -> versioned share vector.

Trades must read, validate and commit inside ``transaction(pool_id)`` so two
trades on the same pool never price against the same snapshot. Different
pools use different locks and proceed in parallel.
"""

from __future__ import annotations

import copy
import math
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

import structlog

from ..core.errors import (
    InvalidLiquidityError,
    InvalidOutcomeIndexError,
    PoolConcludedError,
    PoolNotFoundError,
    StaleSnapshotError,
)
from ..core.types import Pool, PoolOutcome, PoolStatus
from ..pricing import lmsr

logger = structlog.get_logger(__name__)


def _refresh_prices(pool: Pool) -> None:
    for o, p in zip(pool.outcomes, lmsr.prices(pool.shares, pool.b)):
        o.price = p


@dataclass
class InMemoryPoolStore:
    pools: Dict[str, Pool] = field(default_factory=dict)
    _locks: Dict[str, threading.RLock] = field(default_factory=dict, repr=False)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _pool(self, pool_id: str) -> Pool:
        try:
            return self.pools[pool_id]
        except KeyError:
            raise PoolNotFoundError(pool_id) from None

    def _lock_for(self, pool_id: str) -> threading.RLock:
        with self._registry_lock:
            if pool_id not in self.pools:
                raise PoolNotFoundError(pool_id)
            return self._locks[pool_id]

    def create_pool(
        self,
        season_id: str,
        pool_type: str,
        participant_ids: Sequence[str],
        b: float,
        pool_id: Optional[str] = None,
    ) -> Pool:
        if not (b > 0 and math.isfinite(b)):
            raise InvalidLiquidityError(b)
        pool_id = pool_id or str(uuid.uuid4())
        pool = Pool(id=pool_id, season_id=season_id, type=pool_type, b=b)
        pool.outcomes = [
            PoolOutcome(id=f"{pool_id}:{i}", pool_id=pool_id, participant_id=pid)
            for i, pid in enumerate(participant_ids)
        ]
        _refresh_prices(pool)
        with self._registry_lock:
            if pool_id in self.pools:
                raise ValueError(f"pool {pool_id!r} already exists")
            self.pools[pool_id] = pool
            self._locks[pool_id] = threading.RLock()
        logger.info("pool_created", pool_id=pool_id, type=pool_type, outcomes=len(participant_ids), b=b)
        return copy.deepcopy(pool)

    def get(self, pool_id: str) -> Pool:
        with self._lock_for(pool_id):
            return copy.deepcopy(self._pool(pool_id))

    def list_pools(self) -> List[Pool]:
        with self._registry_lock:
            ids = list(self.pools)
        return [self.get(pid) for pid in ids]

    @contextmanager
    def transaction(self, pool_id: str) -> Iterator[Pool]:
        """Hold the pool's lock and yield a snapshot of its current state."""
        with self._lock_for(pool_id):
            yield copy.deepcopy(self._pool(pool_id))

    def commit(
        self,
        pool_id: str,
        expected_version: int,
        index: int,
        delta_shares: float,
        delta_collateral: float,
    ) -> Pool:
        with self._lock_for(pool_id):
            pool = self._pool(pool_id)
            if not pool.is_active:
                raise PoolConcludedError(pool_id)
            if pool.version != expected_version:
                logger.error(
                    "stale_snapshot",
                    pool_id=pool_id,
                    expected_version=expected_version,
                    actual_version=pool.version,
                )
                raise StaleSnapshotError(pool_id, expected_version, pool.version)
            if not 0 <= index < len(pool.outcomes):
                raise InvalidOutcomeIndexError(index, len(pool.outcomes))
            pool.outcomes[index].shares_outstanding += delta_shares
            pool.total_collateral += delta_collateral
            pool.version += 1
            _refresh_prices(pool)
            return copy.deepcopy(pool)

    def conclude(self, pool_id: str, winning_index: int) -> Pool:
        with self._lock_for(pool_id):
            pool = self._pool(pool_id)
            if not pool.is_active:
                raise PoolConcludedError(pool_id)
            if not 0 <= winning_index < len(pool.outcomes):
                raise InvalidOutcomeIndexError(winning_index, len(pool.outcomes))
            pool.status = PoolStatus.CONCLUDED
            pool.winning_index = winning_index
            logger.info(
                "pool_concluded",
                pool_id=pool_id,
                winner=pool.outcomes[winning_index].participant_id,
                total_collateral=pool.total_collateral,
            )
            return copy.deepcopy(pool)
