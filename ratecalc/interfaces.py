"""
Protocol-based interfaces for the extension points of the library.

Using typing.Protocol enables structural subtyping: any class that implements
the required methods satisfies the protocol without explicit inheritance.
New curve shapes, convertible result types or pricing callables can be plugged
in without modifying the market view or the calculation runner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ratecalc.market import MarketDataView


@runtime_checkable
class Curve(Protocol):
    """Protocol for discount and forward curve implementations.

    Any class implementing df() and bumped() can be placed in a market view,
    whether it is used for discounting or for projecting an index.
    """

    name: str

    def df(self, t: float) -> float:
        """Return discount factor to time t (year-fraction)."""
        ...

    def bumped(self, bump: float) -> Curve:
        """Return new curve with parallel additive rate shift."""
        ...


class FxRateProvider(Protocol):
    """Anything able to quote the rate converting one currency into another."""

    def fx_rate(self, base: str, counter: str) -> float:
        """Return the number of `counter` units per unit of `base`."""
        ...


@runtime_checkable
class FxConvertible(Protocol):
    """Result values that can be expressed in another currency.

    The calculation runner converts any value implementing this protocol to
    the reporting currency when automatic conversion is requested.
    """

    def converted_to(self, currency: str, fx: FxRateProvider) -> Any:
        ...


@runtime_checkable
class RiskFactor(Protocol):
    """Value-or-sensitivity capability for one risk factor of a market view.

    Discount curves resolve a date, index curves an observation, to a value
    (discount factor or index rate) and to the point sensitivity of that
    value to the market data.
    """

    def value(self, point: Any) -> float:
        ...

    def point_sensitivity(self, point: Any) -> Any:
        ...


class PricingFunction(Protocol):
    """Callable computing one measure for an expanded product."""

    def __call__(self, product: Any, view: MarketDataView) -> Any:
        ...
