"""Base pricer abstract class for discounting product pricers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.rate_engine import RateObservationEngine, create_default_rate_engine
from ratecalc.sensitivity import PointSensitivities


class BasePricer(ABC):
    """Abstract base class for expanded-product pricers.

    Subclasses set `product_type` and implement present_value() and
    present_value_sensitivity(). Pricers are stateless apart from the rate
    observation engine, so one instance can be shared across threads.
    """

    product_type: ClassVar[type]

    def __init__(self, rate_engine: Optional[RateObservationEngine] = None) -> None:
        self._rate_engine = rate_engine or create_default_rate_engine()

    @property
    def rate_engine(self) -> RateObservationEngine:
        return self._rate_engine

    def can_price(self, product: Any) -> bool:
        """Return True if this pricer handles the expanded product type."""
        return isinstance(product, self.product_type)

    @abstractmethod
    def present_value(self, product: Any, view: MarketDataView) -> CurrencyAmount:
        ...

    @abstractmethod
    def present_value_sensitivity(self, product: Any, view: MarketDataView) -> PointSensitivities:
        ...
