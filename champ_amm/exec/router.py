"""Trade router: turns a trade request into a validated, committed share delta."""

from __future__ import annotations

from typing import Optional

import structlog

from ..core.config import Settings
from ..core.errors import InvalidTradeError, PoolConcludedError
from ..core.types import Pool, TradeRequest, TradeResult, TradeSide
from ..io import metrics
from ..pricing import orders
from ..state.ledger import PositionLedger
from ..state.store import InMemoryPoolStore

logger = structlog.get_logger(__name__)


class TradeRouter:
    def __init__(
        self,
        store: InMemoryPoolStore,
        ledger: PositionLedger,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.ledger = ledger
        self.settings = settings or Settings()

    def _check_request(self, request: TradeRequest) -> None:
        has_amount = request.amount is not None
        has_budget = request.collateral_budget is not None
        if has_amount == has_budget:
            raise InvalidTradeError("exactly one of amount or collateral_budget is required")
        if has_budget and request.side == TradeSide.SELL:
            raise InvalidTradeError("collateral budgets are only supported for buys")

    def _price(self, pool: Pool, request: TradeRequest, user_id: str, user_balance: float) -> TradeResult:
        idx = request.outcome_index
        if request.side == TradeSide.BUY:
            if request.collateral_budget is not None:
                amount, check = orders.quote_for_budget(
                    pool.shares,
                    pool.b,
                    idx,
                    request.collateral_budget,
                    tolerance=self.settings.search_tolerance,
                    bracket_multiplier=self.settings.search_bracket_multiplier,
                    max_iterations=self.settings.search_max_iterations,
                )
                if check.valid and not check.cost <= user_balance:
                    check.valid, check.new_price, check.error = False, 0.0, orders.INSUFFICIENT_BALANCE
            else:
                amount = request.amount
                check = orders.validate_buy_order(pool.shares, pool.b, idx, amount, user_balance)
            signed_cost, new_price = check.cost, check.new_price
        else:
            amount = request.amount
            held = self.ledger.holding(pool.id, user_id, idx)
            check = orders.validate_sell_order(
                pool.shares,
                pool.b,
                idx,
                amount,
                held,
                allow_negative_outstanding=self.settings.allow_negative_outstanding,
            )
            signed_cost, new_price = -check.proceeds, check.new_price
        return TradeResult(
            accepted=check.valid,
            pool_id=pool.id,
            outcome_index=idx,
            side=request.side,
            shares=amount,
            cost=signed_cost,
            new_price=new_price,
            version=pool.version,
            error=check.error,
        )

    def quote(self, request: TradeRequest, user_id: str = "", user_balance: float = float("inf")) -> TradeResult:
        """Price a request against the current snapshot without committing it."""
        self._check_request(request)
        pool = self.store.get(request.pool_id)
        if not pool.is_active:
            raise PoolConcludedError(pool.id)
        return self._price(pool, request, user_id, user_balance)

    def execute(self, request: TradeRequest, user_id: str, user_balance: float) -> TradeResult:
        """Validate and commit under the pool's lock.

        Business rejections come back with ``accepted=False``. A stale commit
        raises ``StaleSnapshotError`` and is not retried.
        """
        self._check_request(request)
        with self.store.transaction(request.pool_id) as pool:
            if not pool.is_active:
                raise PoolConcludedError(pool.id)
            result = self._price(pool, request, user_id, user_balance)
            if not result.accepted:
                metrics.inc_trade(request.side.value, "rejected")
                logger.info(
                    "trade_rejected",
                    pool_id=pool.id,
                    user_id=user_id,
                    side=request.side.value,
                    index=result.outcome_index,
                    reason=result.error,
                    cost=result.cost,
                )
                return result

            delta = result.shares if request.side == TradeSide.BUY else -result.shares
            committed = self.store.commit(
                pool.id, pool.version, result.outcome_index, delta, result.cost
            )
            self.ledger.apply(pool.id, user_id, result.outcome_index, delta)

        result.version = committed.version
        metrics.inc_trade(request.side.value, "accepted")
        logger.info(
            "trade_executed",
            pool_id=committed.id,
            user_id=user_id,
            side=request.side.value,
            index=result.outcome_index,
            shares=result.shares,
            cost=result.cost,
            new_price=result.new_price,
            version=committed.version,
        )
        return result
