"""
Exception hierarchy for pricing and calculation failures.

Pricers never catch these; the calculation runner converts them into failed
cells so that one bad trade or missing curve does not abort the whole run.
"""

from __future__ import annotations


class PricingError(Exception):
    """Base class for all errors raised by the pricing library."""


class MissingMarketDataError(PricingError, LookupError):
    """A curve, FX rate or index fixing required by a calculation is absent."""

    def __init__(self, message: str, key: object = None) -> None:
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedCalculationError(PricingError):
    """No pricing function is registered for a product kind and measure."""


class UnsupportedTradeError(UnsupportedCalculationError):
    """No calculation function is registered for a trade's product kind at all."""


class InvalidProductError(PricingError, ValueError):
    """Trade economics are malformed (detected when expanding the product)."""


class CalculationCancelledError(PricingError):
    """The runner was closed before all cells of a run completed."""


class AmbiguousMarketDataError(PricingError, LookupError):
    """A typed side-data look-up matched more than one value."""
