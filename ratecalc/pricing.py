"""
Pricing entrypoint.

Most users pricing a single trade on a single view should only need
`price(trade, view)` (or `calculate(trade, measure, view)`). They delegate to a
default `CalculationFunctions` registry; scenario runs go through
`CalculationRunner` instead.
"""

from __future__ import annotations

from typing import Any, Optional

from ratecalc.functions import create_default_functions
from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.measures import Measure
from ratecalc.reference_data import ReferenceData
from ratecalc.trades import Trade

_default_functions = create_default_functions()


def calculate(
    trade: Trade,
    measure: Measure,
    view: MarketDataView,
    reference_data: Optional[ReferenceData] = None,
) -> Any:
    """Return one measure of `trade`; errors propagate instead of becoming failed results."""
    function = _default_functions.function_for(trade)
    product = function.expand(trade, reference_data or ReferenceData.standard())
    return function.calculate(measure, product, view)


def price(
    trade: Trade,
    view: MarketDataView,
    reference_data: Optional[ReferenceData] = None,
) -> CurrencyAmount:
    """Return present value of trade (via the default calculation functions)."""
    return calculate(trade, Measure.PRESENT_VALUE, view, reference_data)
