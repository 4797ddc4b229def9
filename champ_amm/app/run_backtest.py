"""Entry point for backtests."""

from __future__ import annotations

import sys

from .main import build_demo_environment
from ..backtest.engine import run_scenario
from ..backtest.scenarios import random_trades
from ..core.config import Settings
from ..core.log import configure_logging
from ..io.persistence import pool_to_dict, write_json
from ..pricing.payout import settle
from ..pricing.summary import pool_summary


def main(out_path: str = "out/backtest_pool.json"):  # pragma: no cover - manual run
    settings = Settings.from_env()
    configure_logging(settings)
    store, ledger, router, pool = build_demo_environment(settings)
    balances = {"alice": 500.0, "bob": 500.0, "carol": 500.0}
    scenario = random_trades(pool.id, steps=50, n_outcomes=len(pool.outcomes), seed=42)
    results = run_scenario(router, scenario, balances)

    summary = pool_summary(store.get(pool.id))
    print(f"Trades accepted: {sum(r.accepted for r in results)}/{len(results)}")
    for row in summary.outcomes:
        print(f"  {row.participant_id:<14} shares={row.shares_outstanding:9.2f} price={row.price:.4f}")

    concluded = store.conclude(pool.id, winning_index=0)
    for user, payout in settle(concluded, ledger).items():
        print(f"  payout {user}: {payout:.2f}")
    write_json(out_path, pool_to_dict(concluded))


if __name__ == "__main__":  # pragma: no cover
    main(*sys.argv[1:2])
