import math

import pytest

from champ_amm.core.errors import InvalidLiquidityError
from champ_amm.core.types import PoolOutcome
from champ_amm.pricing.summary import pool_prices, pool_summary
from champ_amm.risk.exposure import entropy, max_subsidy
from champ_amm.state.store import InMemoryPoolStore


def test_max_subsidy():
    assert max_subsidy(100.0, 2) == pytest.approx(100.0 * math.log(2))
    assert max_subsidy(100.0, 1) == 0.0
    with pytest.raises(InvalidLiquidityError):
        max_subsidy(0.0, 3)


def test_entropy_is_maximal_for_uniform_prices():
    assert entropy([0.25] * 4) == pytest.approx(math.log(4))
    assert entropy([1.0, 0.0]) == 0.0


def test_pool_prices_zip_onto_participants():
    outcomes = [
        PoolOutcome("o1", "p", "norris", 10.0),
        PoolOutcome("o2", "p", "piastri", 0.0),
    ]
    rows = pool_prices(outcomes, 100.0)
    assert [r.participant_id for r in rows] == ["norris", "piastri"]
    assert rows[0].price > rows[1].price
    assert sum(r.price for r in rows) == pytest.approx(1.0)


def test_pool_summary():
    store = InMemoryPoolStore()
    pool = store.create_pool("2026", "team", ["a", "b", "c"], 50.0)
    s = pool_summary(pool)
    assert s.pool_id == pool.id
    assert s.max_subsidy == pytest.approx(50.0 * math.log(3))
    assert s.entropy == pytest.approx(math.log(3))
    assert [r.price for r in s.outcomes] == pytest.approx([1 / 3] * 3)
