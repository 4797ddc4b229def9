"""Core type definitions for championship pools.

A pool is one multi-outcome market (one outcome per team or driver) priced by
LMSR. Authoritative state is ``shares_outstanding`` per outcome plus the pool's
liquidity ``b``; prices are always derived.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PoolStatus(str, Enum):
    ACTIVE = "active"
    CONCLUDED = "concluded"


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass
class PoolOutcome:
    id: str
    pool_id: str
    participant_id: str
    shares_outstanding: float = 0.0
    price: float = 0.0  # read-model projection, refreshed on every commit


@dataclass
class Pool:
    id: str
    season_id: str
    type: str  # e.g. "team" or "driver"
    b: float
    outcomes: List[PoolOutcome] = field(default_factory=list)
    status: PoolStatus = PoolStatus.ACTIVE
    total_collateral: float = 0.0
    version: int = 0
    winning_index: Optional[int] = None

    @property
    def shares(self) -> List[float]:
        return [o.shares_outstanding for o in self.outcomes]

    @property
    def is_active(self) -> bool:
        return self.status == PoolStatus.ACTIVE


@dataclass
class TradeRequest:
    """Either ``amount`` (shares) or ``collateral_budget`` must be set, not both."""

    pool_id: str
    outcome_index: int
    side: TradeSide
    amount: Optional[float] = None
    collateral_budget: Optional[float] = None


@dataclass
class BuyValidation:
    valid: bool
    cost: float
    new_price: float
    error: Optional[str] = None


@dataclass
class SellValidation:
    valid: bool
    proceeds: float
    new_price: float
    error: Optional[str] = None


@dataclass
class TradeResult:
    accepted: bool
    pool_id: str
    outcome_index: int
    side: TradeSide
    shares: float
    cost: float  # positive = paid by trader, negative = returned to trader
    new_price: float
    version: int
    error: Optional[str] = None


@dataclass
class OutcomePrice:
    participant_id: str
    shares_outstanding: float
    price: float


@dataclass
class PoolSummary:
    pool_id: str
    status: PoolStatus
    b: float
    total_collateral: float
    outcomes: List[OutcomePrice]
    max_subsidy: float
    entropy: float
