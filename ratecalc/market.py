"""
Market data view: the read-only snapshot of one scenario.

`MarketDataView` holds everything a pricer may read:
- Discount curves, keyed by currency (e.g. "USD")
- Index forward curves and fixing series, keyed by index name (e.g. "USD-LIBOR-3M")
- An FX matrix
- Typed side data (at most one value per type)

All look-ups go through two risk-factor objects, `DiscountFactors` and
`IborIndexRates`, which resolve a date or observation to a value and to its
point sensitivity. Missing data raises `MissingMarketDataError` naming the key.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from ratecalc.conventions import DayCount
from ratecalc.errors import AmbiguousMarketDataError, MissingMarketDataError
from ratecalc.fx import FxMatrix
from ratecalc.indices import IborIndex
from ratecalc.interfaces import Curve, RiskFactor
from ratecalc.observations import IborRateObservation
from ratecalc.sensitivity import IborRateSensitivity, PointSensitivities, ZeroRateSensitivity
from ratecalc.timeseries import FixingSeries

T = TypeVar("T")


class RiskFactorKind(str, Enum):
    """Kinds of market risk factor a view can resolve."""

    DISCOUNT = "DISCOUNT"
    IBOR_INDEX = "IBOR_INDEX"


@dataclass(frozen=True)
class DiscountFactors:
    """Discount factors of one currency, measured from the valuation date."""

    currency: str
    curve: Curve
    valuation_date: date
    day_count: DayCount

    def relative_time(self, on: date) -> float:
        return self.day_count.year_fraction(self.valuation_date, on)

    def discount_factor(self, on: date) -> float:
        """DF to `on`; dates on or before the valuation date are not discounted."""
        t = self.relative_time(on)
        return self.curve.df(t) if t > 0 else 1.0

    def zero_rate_sensitivity(self, on: date) -> ZeroRateSensitivity:
        """d DF(on) / d zero rate at `on`: -t * DF(t), zero for past dates."""
        t = self.relative_time(on)
        sensitivity = -t * self.curve.df(t) if t > 0 else 0.0
        return ZeroRateSensitivity(self.currency, on, self.currency, sensitivity)

    def value(self, on: date) -> float:
        return self.discount_factor(on)

    def point_sensitivity(self, on: date) -> PointSensitivities:
        return PointSensitivities.of(self.zero_rate_sensitivity(on))


@dataclass(frozen=True)
class IborIndexRates:
    """
    Rates of one index: historic fixings before the valuation date, forwards after.

    On the valuation date itself the fixing is used when already published,
    otherwise the forward rate.
    """

    index: IborIndex
    valuation_date: date
    day_count: DayCount
    curve: Curve | None = None
    fixings: FixingSeries | None = None

    def _fixing(self, fixing_date: date) -> float | None:
        return self.fixings.get(fixing_date) if self.fixings is not None else None

    def is_historic(self, observation: IborRateObservation) -> bool:
        if observation.fixing_date < self.valuation_date:
            return True
        return (
            observation.fixing_date == self.valuation_date
            and self._fixing(observation.fixing_date) is not None
        )

    def rate(self, observation: IborRateObservation) -> float:
        if self.is_historic(observation):
            fixing = self._fixing(observation.fixing_date)
            if fixing is None:
                if self.fixings is None:
                    raise MissingMarketDataError(
                        f"no fixing series for index {self.index.name}", key=self.index.name
                    )
                raise MissingMarketDataError(
                    f"no fixing for index {self.index.name} on {observation.fixing_date}",
                    key=(self.index.name, observation.fixing_date),
                )
            return fixing
        return self.forward_rate(observation)

    def forward_rate(self, observation: IborRateObservation) -> float:
        """Simple forward over the underlying deposit: (DF(start)/DF(end) - 1) / alpha."""
        if self.curve is None:
            raise MissingMarketDataError(
                f"no forward curve for index {self.index.name}", key=self.index.name
            )
        t_start = self.day_count.year_fraction(self.valuation_date, observation.effective_date)
        t_end = self.day_count.year_fraction(self.valuation_date, observation.maturity_date)
        df_start = self.curve.df(t_start)
        df_end = self.curve.df(t_end)
        return (df_start / df_end - 1.0) / observation.year_fraction

    def value(self, observation: IborRateObservation) -> float:
        return self.rate(observation)

    def point_sensitivity(self, observation: IborRateObservation) -> PointSensitivities:
        """Unit sensitivity to the forward rate, empty once the rate has fixed."""
        if self.is_historic(observation):
            return PointSensitivities.empty()
        return PointSensitivities.of(
            IborRateSensitivity(
                self.index.name, observation.fixing_date, self.index.currency, 1.0
            )
        )


class MarketDataView:
    """
    Market snapshot for a single scenario.

    Immutable-style: the with_* methods return new views; the mappings held
    by a view are read-only proxies over private copies.
    """

    def __init__(
        self,
        valuation_date: date,
        discount_curves: Mapping[str, Curve] | None = None,
        index_curves: Mapping[str, Curve] | None = None,
        time_series: Mapping[str, FixingSeries] | None = None,
        fx_matrix: FxMatrix | None = None,
        additional_data: Mapping[type, Any] | None = None,
        day_count: DayCount = DayCount.ACT_365F,
    ) -> None:
        for data_type, value in (additional_data or {}).items():
            if not isinstance(data_type, type) or not isinstance(value, data_type):
                raise ValueError(
                    f"additional data value {value!r} is not an instance of its key {data_type!r}"
                )
        self._valuation_date = valuation_date
        self._day_count = day_count
        self._discount_curves = MappingProxyType(dict(discount_curves or {}))
        self._index_curves = MappingProxyType(dict(index_curves or {}))
        self._time_series = MappingProxyType(dict(time_series or {}))
        self._fx_matrix = fx_matrix if fx_matrix is not None else FxMatrix.empty()
        self._additional_data = MappingProxyType(dict(additional_data or {}))

    def __repr__(self) -> str:
        return (
            f"MarketDataView(valuation_date={self._valuation_date}, "
            f"discount_curves={sorted(self._discount_curves)}, "
            f"index_curves={sorted(self._index_curves)}, "
            f"time_series={sorted(self._time_series)})"
        )

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def day_count(self) -> DayCount:
        return self._day_count

    @property
    def discount_curves(self) -> Mapping[str, Curve]:
        return self._discount_curves

    @property
    def index_curves(self) -> Mapping[str, Curve]:
        return self._index_curves

    @property
    def time_series(self) -> Mapping[str, FixingSeries]:
        return self._time_series

    @property
    def fx_matrix(self) -> FxMatrix:
        return self._fx_matrix

    def relative_time(self, on: date) -> float:
        """Year fraction from the valuation date (negative for past dates)."""
        return self._day_count.year_fraction(self._valuation_date, on)

    # --- unified risk-factor look-up ---

    def risk_factor(self, kind: RiskFactorKind, identifier: Any) -> RiskFactor:
        """Resolve a discount currency or an index to its value/sensitivity provider."""
        if kind is RiskFactorKind.DISCOUNT:
            curve = self._discount_curves.get(identifier)
            if curve is None:
                raise MissingMarketDataError(
                    f"no discount curve for currency {identifier}. "
                    f"Available currencies: {sorted(self._discount_curves)}",
                    key=identifier,
                )
            return DiscountFactors(identifier, curve, self._valuation_date, self._day_count)
        if kind is RiskFactorKind.IBOR_INDEX:
            if not isinstance(identifier, IborIndex):
                raise TypeError(f"IBOR risk factor needs an IborIndex, got {identifier!r}")
            return IborIndexRates(
                index=identifier,
                valuation_date=self._valuation_date,
                day_count=self._day_count,
                curve=self._index_curves.get(identifier.name),
                fixings=self._time_series.get(identifier.name),
            )
        raise ValueError(f"unknown risk factor kind {kind!r}")

    def discount_factors(self, currency: str) -> DiscountFactors:
        return self.risk_factor(RiskFactorKind.DISCOUNT, currency)  # type: ignore[return-value]

    def discount_factor(self, currency: str, on: date) -> float:
        return self.discount_factors(currency).discount_factor(on)

    def ibor_index_rates(self, index: IborIndex) -> IborIndexRates:
        return self.risk_factor(RiskFactorKind.IBOR_INDEX, index)  # type: ignore[return-value]

    def fx_rate(self, base: str, counter: str) -> float:
        return self._fx_matrix.fx_rate(base, counter)

    def data(self, data_type: type[T]) -> T:
        """Return the single side-data value of `data_type` (or a subclass)."""
        if data_type in self._additional_data:
            return self._additional_data[data_type]
        matches = [v for v in self._additional_data.values() if isinstance(v, data_type)]
        if not matches:
            raise MissingMarketDataError(
                f"no additional data of type {data_type.__name__}", key=data_type
            )
        if len(matches) > 1:
            raise AmbiguousMarketDataError(
                f"additional data of type {data_type.__name__} is ambiguous: {len(matches)} values"
            )
        return matches[0]

    # --- copy-on-write variants ---

    def _copy(self, **changes: Any) -> "MarketDataView":
        kwargs: dict[str, Any] = {
            "valuation_date": self._valuation_date,
            "discount_curves": self._discount_curves,
            "index_curves": self._index_curves,
            "time_series": self._time_series,
            "fx_matrix": self._fx_matrix,
            "additional_data": self._additional_data,
            "day_count": self._day_count,
        }
        kwargs.update(changes)
        return MarketDataView(**kwargs)

    def with_discount_curve(self, currency: str, curve: Curve) -> "MarketDataView":
        """Return a new view with the given discount curve updated/added."""
        curves = dict(self._discount_curves)
        curves[currency] = curve
        return self._copy(discount_curves=curves)

    def with_index_curve(self, index_name: str, curve: Curve) -> "MarketDataView":
        """Return a new view with the given index curve updated/added."""
        curves = dict(self._index_curves)
        curves[index_name] = curve
        return self._copy(index_curves=curves)

    def with_fx_matrix(self, fx_matrix: FxMatrix) -> "MarketDataView":
        return self._copy(fx_matrix=fx_matrix)

    def bumped(self, bump: float) -> "MarketDataView":
        """Return a new view with every curve shifted in parallel by `bump`."""
        return self._copy(
            discount_curves={k: c.bumped(bump) for k, c in self._discount_curves.items()},
            index_curves={k: c.bumped(bump) for k, c in self._index_curves.items()},
        )
