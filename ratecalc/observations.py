"""
Rate observations: how the rate of one accrual period is determined.

Observations are resolved when a product is expanded: the dates of the
deposit underlying each fixing are computed once, with the reference data's
holiday calendars, so pricing never needs calendar arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from ratecalc.errors import InvalidProductError
from ratecalc.indices import IborIndex
from ratecalc.reference_data import ReferenceData


@dataclass(frozen=True)
class FixedRateObservation:
    """A rate agreed in advance."""

    rate: float


@dataclass(frozen=True)
class IborRateObservation:
    """
    Observation of a single index on a fixing date.

    `effective_date` and `maturity_date` delimit the deposit underlying the
    fixing; the forward rate is implied from the index curve over that period.
    """

    index: IborIndex
    fixing_date: date
    effective_date: date
    maturity_date: date

    @classmethod
    def of(
        cls,
        index: IborIndex,
        fixing_date: date,
        reference_data: ReferenceData,
    ) -> "IborRateObservation":
        holidays = reference_data.calendar(index.calendar)
        effective = index.effective_date(fixing_date, holidays)
        return cls(index, fixing_date, effective, index.maturity_date(effective, holidays))

    @property
    def year_fraction(self) -> float:
        return self.index.day_count.year_fraction(self.effective_date, self.maturity_date)


@dataclass(frozen=True)
class IborInterpolatedRateObservation:
    """
    Rate linearly interpolated between a short and a long tenor index.

    Both observations share the fixing date and the effective date of the
    short index; used for stub periods whose length falls between two tenors.
    """

    short_observation: IborRateObservation
    long_observation: IborRateObservation

    def __post_init__(self) -> None:
        short, long = self.short_observation, self.long_observation
        if short.index.currency != long.index.currency:
            raise InvalidProductError(
                f"interpolated indices must share a currency: {short.index} and {long.index}"
            )
        if short.index.tenor_months >= long.index.tenor_months:
            raise InvalidProductError(
                f"short index {short.index} must have a shorter tenor than {long.index}"
            )
        if short.fixing_date != long.fixing_date:
            raise InvalidProductError("interpolated observations must share a fixing date")

    @classmethod
    def of(
        cls,
        index1: IborIndex,
        index2: IborIndex,
        fixing_date: date,
        reference_data: ReferenceData,
    ) -> "IborInterpolatedRateObservation":
        """Build from two indices in any order; the shorter tenor becomes the short index."""
        short_index, long_index = sorted((index1, index2), key=lambda i: i.tenor_months)
        short_holidays = reference_data.calendar(short_index.calendar)
        long_holidays = reference_data.calendar(long_index.calendar)
        effective = short_index.effective_date(fixing_date, short_holidays)
        return cls(
            IborRateObservation(
                short_index, fixing_date, effective,
                short_index.maturity_date(effective, short_holidays),
            ),
            IborRateObservation(
                long_index, fixing_date, effective,
                long_index.maturity_date(effective, long_holidays),
            ),
        )

    @property
    def fixing_date(self) -> date:
        return self.short_observation.fixing_date

    @property
    def short_index(self) -> IborIndex:
        return self.short_observation.index

    @property
    def long_index(self) -> IborIndex:
        return self.long_observation.index


RateObservation = Union[FixedRateObservation, IborRateObservation, IborInterpolatedRateObservation]


def observed_indices(observation: RateObservation) -> tuple[IborIndex, ...]:
    """Indices whose market data the observation reads, in observation order."""
    if isinstance(observation, IborRateObservation):
        return (observation.index,)
    if isinstance(observation, IborInterpolatedRateObservation):
        return (observation.short_index, observation.long_index)
    return ()
