"""Prometheus instrumentation."""

from __future__ import annotations

from prometheus_client import Counter

trades_total = Counter(
    "amm_trades_total", "Trades routed through the pool AMM", ["side", "result"]
)
search_saturations_total = Counter(
    "amm_search_saturations_total",
    "Inverse searches whose result landed on the bracket upper bound",
)


def inc_trade(side: str, result: str) -> None:
    trades_total.labels(side=side, result=result).inc()


def inc_search_saturation() -> None:
    search_saturations_total.inc()
