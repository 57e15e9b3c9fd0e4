"""
Multi-scenario market data.

Fixing time series and side data are scenario-invariant and shared; curves
and FX rates vary per scenario. `scenario(i)` projects scenario `i` onto an
immutable `MarketDataView`, so workers never share mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from ratecalc.conventions import DayCount
from ratecalc.fx import FxMatrix
from ratecalc.interfaces import Curve
from ratecalc.market import MarketDataView
from ratecalc.requirements import (
    CalculationRequirements,
    CurveKey,
    DiscountCurveKey,
    IndexCurveKey,
)
from ratecalc.timeseries import FixingSeries


@dataclass(frozen=True)
class ScenarioData:
    """Curves and FX rates of one scenario."""

    discount_curves: Mapping[str, Curve] = field(default_factory=dict)
    index_curves: Mapping[str, Curve] = field(default_factory=dict)
    fx_matrix: FxMatrix = field(default_factory=FxMatrix.empty)

    def __post_init__(self) -> None:
        object.__setattr__(self, "discount_curves", MappingProxyType(dict(self.discount_curves)))
        object.__setattr__(self, "index_curves", MappingProxyType(dict(self.index_curves)))

    def has(self, key: CurveKey) -> bool:
        if isinstance(key, DiscountCurveKey):
            return key.currency in self.discount_curves
        return key.index in self.index_curves

    def bumped(self, bump: float) -> "ScenarioData":
        return ScenarioData(
            {k: c.bumped(bump) for k, c in self.discount_curves.items()},
            {k: c.bumped(bump) for k, c in self.index_curves.items()},
            self.fx_matrix,
        )


class ScenarioMarketData:
    """Market data for one or more scenarios sharing a valuation date."""

    def __init__(
        self,
        valuation_date: date,
        scenarios: Sequence[ScenarioData],
        time_series: Mapping[str, FixingSeries] | None = None,
        additional_data: Mapping[type, Any] | None = None,
        day_count: DayCount = DayCount.ACT_365F,
    ) -> None:
        if not scenarios:
            raise ValueError("scenario market data needs at least one scenario")
        self._valuation_date = valuation_date
        self._scenarios = tuple(scenarios)
        self._time_series = MappingProxyType(dict(time_series or {}))
        self._additional_data = MappingProxyType(dict(additional_data or {}))
        self._day_count = day_count

    @classmethod
    def single(
        cls,
        valuation_date: date,
        discount_curves: Mapping[str, Curve] | None = None,
        index_curves: Mapping[str, Curve] | None = None,
        fx_matrix: FxMatrix | None = None,
        time_series: Mapping[str, FixingSeries] | None = None,
        additional_data: Mapping[type, Any] | None = None,
        day_count: DayCount = DayCount.ACT_365F,
    ) -> "ScenarioMarketData":
        scenario = ScenarioData(
            discount_curves or {}, index_curves or {}, fx_matrix or FxMatrix.empty()
        )
        return cls(valuation_date, [scenario], time_series, additional_data, day_count)

    @classmethod
    def from_view(cls, view: MarketDataView) -> "ScenarioMarketData":
        return cls.single(
            view.valuation_date,
            view.discount_curves,
            view.index_curves,
            view.fx_matrix,
            view.time_series,
            day_count=view.day_count,
        )

    def with_parallel_shifts(self, shifts: Iterable[float]) -> "ScenarioMarketData":
        """One scenario per shift, each bumping every curve of the first scenario."""
        base = self._scenarios[0]
        return ScenarioMarketData(
            self._valuation_date,
            [base.bumped(s) for s in shifts],
            self._time_series,
            self._additional_data,
            self._day_count,
        )

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def scenario_count(self) -> int:
        return len(self._scenarios)

    @property
    def time_series(self) -> Mapping[str, FixingSeries]:
        return self._time_series

    def scenario(self, index: int) -> MarketDataView:
        """View of scenario `index`: shared time series, that scenario's curves and FX."""
        if not 0 <= index < len(self._scenarios):
            raise IndexError(
                f"scenario {index} out of range (scenario count {len(self._scenarios)})"
            )
        data = self._scenarios[index]
        return MarketDataView(
            valuation_date=self._valuation_date,
            discount_curves=data.discount_curves,
            index_curves=data.index_curves,
            time_series=self._time_series,
            fx_matrix=data.fx_matrix,
            additional_data=self._additional_data,
            day_count=self._day_count,
        )

    def missing(self, requirements: CalculationRequirements, index: int) -> list[CurveKey]:
        """Required curves that scenario `index` does not supply, in stable order."""
        data = self._scenarios[index]
        return [key for key in requirements.sorted_curves() if not data.has(key)]

    def first_missing(self, requirements: CalculationRequirements) -> tuple[int, CurveKey] | None:
        """First (scenario, curve) pair absent from the data, or None when complete."""
        for i in range(len(self._scenarios)):
            missing = self.missing(requirements, i)
            if missing:
                return i, missing[0]
        return None
