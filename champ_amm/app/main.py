"""App bootstrap: a demo season with a constructors' championship pool."""

from __future__ import annotations

from typing import Optional

from ..core.config import Settings
from ..core.types import Pool
from ..exec.router import TradeRouter
from ..state.ledger import PositionLedger
from ..state.store import InMemoryPoolStore

DEMO_SEASON = "2026"
DEMO_TEAMS = [
    "mclaren",
    "ferrari",
    "red_bull",
    "mercedes",
    "aston_martin",
    "williams",
    "alpine",
    "haas",
    "racing_bulls",
    "sauber",
]


def build_demo_environment(
    settings: Optional[Settings] = None,
) -> tuple[InMemoryPoolStore, PositionLedger, TradeRouter, Pool]:
    settings = settings or Settings()
    store = InMemoryPoolStore()
    ledger = PositionLedger()
    pool = store.create_pool(
        DEMO_SEASON, "team", DEMO_TEAMS, settings.default_liquidity, pool_id="team-2026"
    )
    router = TradeRouter(store, ledger, settings)
    return store, ledger, router, pool
