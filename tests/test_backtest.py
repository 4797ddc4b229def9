import pytest

from champ_amm.app.main import DEMO_TEAMS, build_demo_environment
from champ_amm.backtest.engine import accepted_volume, run_scenario
from champ_amm.backtest.scenarios import random_trades
from champ_amm.core.types import TradeSide
from champ_amm.pricing import lmsr


def _run(seed):
    store, ledger, router, pool = build_demo_environment()
    balances = {"alice": 500.0, "bob": 500.0, "carol": 500.0}
    scenario = random_trades(pool.id, steps=60, n_outcomes=len(DEMO_TEAMS), seed=seed)
    results = run_scenario(router, scenario, balances)
    return store.get(pool.id), balances, results


def test_scenario_is_deterministic():
    a_pool, a_bal, _ = _run(7)
    b_pool, b_bal, _ = _run(7)
    assert a_pool.shares == b_pool.shares
    assert a_bal == b_bal


def test_scenario_keeps_pool_consistent():
    pool, balances, results = _run(42)
    assert len(results) == 60
    assert any(r.accepted for r in results)
    assert all(q >= 0 for q in pool.shares)
    assert all(bal >= -1e-9 for bal in balances.values())
    expected = lmsr.cost(pool.shares, pool.b) - lmsr.cost([0.0] * len(pool.shares), pool.b)
    assert pool.total_collateral == pytest.approx(expected, rel=1e-9, abs=1e-9)
    spent = 1500.0 - sum(balances.values())
    assert spent == pytest.approx(pool.total_collateral, abs=1e-6)
    net = accepted_volume(results, TradeSide.BUY) - accepted_volume(results, TradeSide.SELL)
    assert sum(pool.shares) == pytest.approx(net)
