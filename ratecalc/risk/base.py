"""Base class for risk measure implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView


class BaseRiskMeasure(ABC):
    """Base class for risk measures computed from an expanded product and a view."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        ...

    @abstractmethod
    def compute(self, product: Any, view: MarketDataView) -> CurrencyAmount:
        """Compute the risk measure value."""
        ...
