"""
Rate observation engine: observed rate and its point sensitivity.

Dispatch is a registry keyed by observation type, mirroring the pricer
registry of the calculation functions: a new observation kind is supported by
registering a `(rate, sensitivity)` pair, without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from ratecalc.market import MarketDataView
from ratecalc.observations import (
    FixedRateObservation,
    IborInterpolatedRateObservation,
    IborRateObservation,
)
from ratecalc.sensitivity import PointSensitivities

RateFunction = Callable[[Any, date, date, MarketDataView], float]
SensitivityFunction = Callable[[Any, date, date, MarketDataView], PointSensitivities]


@dataclass(frozen=True)
class ObservationHandler:
    rate: RateFunction
    sensitivity: SensitivityFunction


def interpolation_weights(
    observation: IborInterpolatedRateObservation, end_date: date
) -> tuple[float, float]:
    """
    Linear weights of the short and long index for an accrual ending on `end_date`.

    Day counts are calendar days from the fixing date to the short maturity,
    the long maturity and the accrual end. Coinciding maturities divide by zero.
    """
    fixing = observation.fixing_date
    days_short = (observation.short_observation.maturity_date - fixing).days
    days_long = (observation.long_observation.maturity_date - fixing).days
    days_coupon = (end_date - fixing).days
    span = days_long - days_short
    return (days_long - days_coupon) / span, (days_coupon - days_short) / span


def _fixed_rate(obs: FixedRateObservation, start: date, end: date, view: MarketDataView) -> float:
    return obs.rate


def _fixed_sensitivity(
    obs: FixedRateObservation, start: date, end: date, view: MarketDataView
) -> PointSensitivities:
    return PointSensitivities.empty()


def _ibor_rate(obs: IborRateObservation, start: date, end: date, view: MarketDataView) -> float:
    return view.ibor_index_rates(obs.index).rate(obs)


def _ibor_sensitivity(
    obs: IborRateObservation, start: date, end: date, view: MarketDataView
) -> PointSensitivities:
    return view.ibor_index_rates(obs.index).point_sensitivity(obs)


def _interpolated_rate(
    obs: IborInterpolatedRateObservation, start: date, end: date, view: MarketDataView
) -> float:
    rate_short = view.ibor_index_rates(obs.short_index).rate(obs.short_observation)
    rate_long = view.ibor_index_rates(obs.long_index).rate(obs.long_observation)
    w_short, w_long = interpolation_weights(obs, end)
    return w_short * rate_short + w_long * rate_long


def _interpolated_sensitivity(
    obs: IborInterpolatedRateObservation, start: date, end: date, view: MarketDataView
) -> PointSensitivities:
    w_short, w_long = interpolation_weights(obs, end)
    short_sens = view.ibor_index_rates(obs.short_index).point_sensitivity(obs.short_observation)
    long_sens = view.ibor_index_rates(obs.long_index).point_sensitivity(obs.long_observation)
    return short_sens.multiplied_by(w_short).combined_with(long_sens.multiplied_by(w_long))


class RateObservationEngine:
    """
    Registry-based rate observation engine.

    The handler of the exact observation type is used; there is no fallback
    through base classes.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, ObservationHandler] = {}

    def register(
        self,
        observation_type: type,
        rate: RateFunction,
        sensitivity: SensitivityFunction,
    ) -> None:
        """Register (or replace) the handler for an observation type."""
        self._handlers[observation_type] = ObservationHandler(rate, sensitivity)

    def _handler(self, observation: Any) -> ObservationHandler:
        try:
            return self._handlers[type(observation)]
        except KeyError:
            raise TypeError(
                f"No rate handler registered for {type(observation).__name__}. "
                "Register one with engine.register(type, rate, sensitivity)."
            ) from None

    def rate(self, observation: Any, start_date: date, end_date: date, view: MarketDataView) -> float:
        """Observed rate for an accrual period from `start_date` to `end_date`."""
        return self._handler(observation).rate(observation, start_date, end_date, view)

    def rate_sensitivity(
        self, observation: Any, start_date: date, end_date: date, view: MarketDataView
    ) -> PointSensitivities:
        """Point sensitivity of the observed rate to the index forward rates."""
        return self._handler(observation).sensitivity(observation, start_date, end_date, view)


def create_default_rate_engine() -> RateObservationEngine:
    """Engine handling fixed, single-index and interpolated observations."""
    engine = RateObservationEngine()
    engine.register(FixedRateObservation, _fixed_rate, _fixed_sensitivity)
    engine.register(IborRateObservation, _ibor_rate, _ibor_sensitivity)
    engine.register(IborInterpolatedRateObservation, _interpolated_rate, _interpolated_sensitivity)
    return engine
