"""Pricing model abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class PricingModel(ABC):
    @abstractmethod
    def prices(self, quantities: Sequence[float]) -> Sequence[float]:
        """Return marginal prices for each outcome given current outstanding quantity vector."""
        ...

    @abstractmethod
    def cost(self, quantities: Sequence[float]) -> float:
        """Return the market maker's cost function value at ``quantities``."""
        ...
