"""
Calculation functions: product kind -> (requirements, measure -> pricing callable).

Design intent:
- Trades and products are **data only**; all market access happens here and
  in the pricers.
- `CalculationFunctions` is a **registry** keyed by `ProductKind`, enabling:
  - Adding product kinds without modifying the runner
  - Swapping pricers per product kind (e.g. a stubbed rate engine in tests)
  - Restricting the measures offered for a product kind
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from ratecalc.errors import UnsupportedCalculationError, UnsupportedTradeError
from ratecalc.indices import IborIndex
from ratecalc.interfaces import PricingFunction
from ratecalc.market import MarketDataView
from ratecalc.measures import Measure
from ratecalc.pricers import (
    BasePricer,
    DiscountingFraProductPricer,
    DiscountingSwapLegPricer,
    DiscountingTermDepositProductPricer,
)
from ratecalc.reference_data import ReferenceData
from ratecalc.requirements import (
    CalculationRequirements,
    DiscountCurveKey,
    IndexCurveKey,
    IndexRateKey,
)
from ratecalc.risk import PV01Parallel
from ratecalc.trades import ProductKind

MeasureFunction = PricingFunction


def _index_requirements(
    indices: tuple[IborIndex, ...], currency: str, measure: Measure
) -> CalculationRequirements:
    curves: list = [IndexCurveKey(idx.name) for idx in indices]
    if measure.discounts:
        curves.append(DiscountCurveKey(currency))
    return CalculationRequirements.of(
        curves=curves,
        time_series=[IndexRateKey(idx.name) for idx in indices],
        output_currencies=[currency],
    )


class CalculationFunction(ABC):
    """Prices every supported measure of one product kind."""

    product_kind: ProductKind

    def __init__(self, pricer: BasePricer) -> None:
        self._pricer = pricer
        self._measures = self._measure_functions(pricer)

    @property
    def pricer(self) -> BasePricer:
        return self._pricer

    @abstractmethod
    def _measure_functions(self, pricer: Any) -> Mapping[Measure, MeasureFunction]:
        ...

    @abstractmethod
    def requirements(self, trade: Any, measure: Measure) -> CalculationRequirements:
        """Market data read when computing `measure` for `trade` (no expansion needed)."""
        ...

    @property
    def supported_measures(self) -> frozenset[Measure]:
        return frozenset(self._measures)

    def expand(self, trade: Any, reference_data: ReferenceData) -> Any:
        return trade.product.expand(reference_data)

    def calculate(self, measure: Measure, product: Any, view: MarketDataView) -> Any:
        fn = self._measures.get(measure)
        if fn is None:
            raise UnsupportedCalculationError(
                f"measure {measure.value} is not supported for product kind {self.product_kind.value}"
            )
        if not self._pricer.can_price(product):
            raise UnsupportedCalculationError(
                f"{type(self._pricer).__name__} cannot price {type(product).__name__}"
            )
        return fn(product, view)


class FraCalculationFunction(CalculationFunction):
    product_kind = ProductKind.FRA

    def __init__(self, pricer: DiscountingFraProductPricer | None = None) -> None:
        super().__init__(pricer or DiscountingFraProductPricer())

    def _measure_functions(self, pricer: DiscountingFraProductPricer) -> Mapping[Measure, MeasureFunction]:
        return {
            Measure.PRESENT_VALUE: pricer.present_value,
            Measure.FUTURE_VALUE: pricer.future_value,
            Measure.PRESENT_VALUE_SENSITIVITY: pricer.present_value_sensitivity,
            Measure.FUTURE_VALUE_SENSITIVITY: pricer.future_value_sensitivity,
            Measure.PAR_RATE: pricer.par_rate,
            Measure.PAR_SPREAD: pricer.par_spread,
            Measure.CASH_FLOWS: pricer.cash_flows,
            Measure.PV01: PV01Parallel(pricer).compute,
        }

    def requirements(self, trade: Any, measure: Measure) -> CalculationRequirements:
        fra = trade.product
        return _index_requirements(fra.indices, fra.currency, measure)


class TermDepositCalculationFunction(CalculationFunction):
    product_kind = ProductKind.TERM_DEPOSIT

    def __init__(self, pricer: DiscountingTermDepositProductPricer | None = None) -> None:
        super().__init__(pricer or DiscountingTermDepositProductPricer())

    def _measure_functions(
        self, pricer: DiscountingTermDepositProductPricer
    ) -> Mapping[Measure, MeasureFunction]:
        return {
            Measure.PRESENT_VALUE: pricer.present_value,
            Measure.PRESENT_VALUE_SENSITIVITY: pricer.present_value_sensitivity,
            Measure.PAR_RATE: pricer.par_rate,
            Measure.PAR_SPREAD: pricer.par_spread,
            Measure.CASH_FLOWS: pricer.cash_flows,
            Measure.PV01: PV01Parallel(pricer).compute,
        }

    def requirements(self, trade: Any, measure: Measure) -> CalculationRequirements:
        deposit = trade.product
        # Par rate and spread are implied from the discount curve.
        reads_curve = measure.discounts or measure in (Measure.PAR_RATE, Measure.PAR_SPREAD)
        return CalculationRequirements.of(
            curves=[DiscountCurveKey(deposit.currency)] if reads_curve else [],
            output_currencies=[deposit.currency],
        )


class SwapLegCalculationFunction(CalculationFunction):
    product_kind = ProductKind.SWAP_LEG

    def __init__(self, pricer: DiscountingSwapLegPricer | None = None) -> None:
        super().__init__(pricer or DiscountingSwapLegPricer())

    def _measure_functions(self, pricer: DiscountingSwapLegPricer) -> Mapping[Measure, MeasureFunction]:
        return {
            Measure.PRESENT_VALUE: pricer.present_value,
            Measure.FUTURE_VALUE: pricer.future_value,
            Measure.PRESENT_VALUE_SENSITIVITY: pricer.present_value_sensitivity,
            Measure.FUTURE_VALUE_SENSITIVITY: pricer.future_value_sensitivity,
            Measure.CASH_FLOWS: pricer.cash_flows,
            Measure.PV01: PV01Parallel(pricer).compute,
        }

    def requirements(self, trade: Any, measure: Measure) -> CalculationRequirements:
        leg = trade.product
        return _index_requirements(leg.indices, leg.currency, measure)


class CalculationFunctions:
    """
    Registry of calculation functions by product kind.

    Registering a function for a kind that is already present replaces it.
    """

    def __init__(self) -> None:
        self._functions: dict[ProductKind, CalculationFunction] = {}

    def register(self, function: CalculationFunction) -> None:
        self._functions[function.product_kind] = function

    def __contains__(self, kind: object) -> bool:
        return kind in self._functions

    @property
    def product_kinds(self) -> frozenset[ProductKind]:
        return frozenset(self._functions)

    def function_for(self, trade: Any) -> CalculationFunction:
        """Dispatch on the trade's product kind."""
        kind = getattr(trade, "product_kind", None)
        function = self._functions.get(kind) if kind is not None else None
        if function is None:
            raise UnsupportedTradeError(
                f"No calculation function registered for {type(trade).__name__}"
                + (f" (product kind {getattr(kind, 'value', kind)})" if kind is not None else "")
                + ". Register one with functions.register(function)."
            )
        return function


def create_default_functions() -> CalculationFunctions:
    """Factory for a registry with all built-in product kinds."""
    functions = CalculationFunctions()
    functions.register(FraCalculationFunction())
    functions.register(TermDepositCalculationFunction())
    functions.register(SwapLegCalculationFunction())
    return functions
