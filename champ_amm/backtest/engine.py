"""Backtesting engine: replay a scenario through the trade router."""

from __future__ import annotations

from typing import Dict, List

from .scenarios import Scenario
from ..core.types import TradeResult, TradeSide
from ..exec.router import TradeRouter


def run_scenario(
    router: TradeRouter, scenario: Scenario, balances: Dict[str, float]
) -> List[TradeResult]:
    """Execute every trade, debiting/crediting ``balances`` in place."""
    results: List[TradeResult] = []
    for user_id, request in scenario:
        balance = balances.setdefault(user_id, 0.0)
        result = router.execute(request, user_id, balance)
        if result.accepted:
            balances[user_id] = balance - result.cost
        results.append(result)
    return results


def accepted_volume(results: List[TradeResult], side: TradeSide) -> float:
    return sum(r.shares for r in results if r.accepted and r.side == side)
