"""Typed errors raised by the pricing engine and its collaborators.

Invalid input fails fast. Business rejections (insufficient balance or shares)
are not exceptions; they come back as ``valid=False`` results.
"""

from __future__ import annotations


class AMMError(Exception):
    """Base for every error raised by champ_amm."""


class InvalidInputError(AMMError, ValueError):
    pass


class InvalidLiquidityError(InvalidInputError):
    def __init__(self, b: float):
        super().__init__(f"liquidity parameter b must be positive and finite, got {b!r}")
        self.b = b


class InvalidOutcomeIndexError(InvalidInputError, IndexError):
    def __init__(self, index: int, n: int):
        super().__init__(f"outcome index {index} out of range for {n} outcomes")
        self.index = index
        self.n = n


class InvalidAmountError(InvalidInputError):
    pass


class InvalidTradeError(InvalidInputError):
    pass


class NumericalInstabilityError(AMMError, ArithmeticError):
    """Non-finite shares went in, or a non-finite cost/price came out."""


class PoolError(AMMError):
    pass


class PoolNotFoundError(PoolError, KeyError):
    def __init__(self, pool_id: str):
        super().__init__(pool_id)
        self.pool_id = pool_id

    def __str__(self) -> str:
        return f"pool {self.pool_id!r} not found"


class PoolConcludedError(PoolError):
    def __init__(self, pool_id: str):
        super().__init__(f"pool {pool_id!r} is concluded; no further trades")
        self.pool_id = pool_id


class StaleSnapshotError(PoolError):
    """A commit was attempted against a pool version that has since moved.

    Fatal: the trade was priced on a stale share vector.
    """

    def __init__(self, pool_id: str, expected_version: int, actual_version: int):
        super().__init__(
            f"pool {pool_id!r} at version {actual_version}, commit expected {expected_version}"
        )
        self.pool_id = pool_id
        self.expected_version = expected_version
        self.actual_version = actual_version
