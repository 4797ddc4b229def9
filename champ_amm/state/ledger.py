"""Per-user share holdings, keyed by pool and outcome index."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Tuple

PositionKey = Tuple[str, str, int]  # (pool_id, user_id, outcome_index)


@dataclass
class PositionLedger:
    _holdings: Dict[PositionKey, float] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def apply(self, pool_id: str, user_id: str, index: int, delta: float) -> float:
        key = (pool_id, user_id, index)
        with self._lock:
            size = self._holdings.get(key, 0.0) + delta
            self._holdings[key] = size
        return size

    def holding(self, pool_id: str, user_id: str, index: int) -> float:
        return self._holdings.get((pool_id, user_id, index), 0.0)

    def holders(self, pool_id: str, index: int) -> Dict[str, float]:
        with self._lock:
            return {
                user: size
                for (pid, user, idx), size in self._holdings.items()
                if pid == pool_id and idx == index and size > 0
            }

    def positions(self, user_id: str) -> Dict[Tuple[str, int], float]:
        with self._lock:
            return {
                (pid, idx): size
                for (pid, user, idx), size in self._holdings.items()
                if user == user_id and size != 0
            }
