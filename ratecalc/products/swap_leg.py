"""
Swap leg with a regular schedule (instrument data only; pricing via the swap leg pricer).

The schedule is rolled backward from the end date, so an irregular first
period becomes a short initial stub. A floating stub may be observed on its
own index or interpolated between two indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ratecalc.conventions import DayCount, add_months
from ratecalc.errors import InvalidProductError
from ratecalc.indices import IborIndex
from ratecalc.observations import (
    FixedRateObservation,
    IborInterpolatedRateObservation,
    IborRateObservation,
    RateObservation,
    observed_indices,
)
from ratecalc.products.common import PayReceive
from ratecalc.reference_data import ReferenceData


@dataclass(frozen=True)
class SwapLeg:
    """
    Fixed or floating leg: set exactly one of `fixed_rate` and `index`.

    `stub_indices` (one or two indices) sets the rate of the initial stub of a
    floating leg; two indices are interpolated.
    """

    pay_receive: PayReceive
    currency: str
    notional: float
    start_date: date
    end_date: date
    frequency_months: int
    day_count: DayCount = DayCount.ACT_360
    calendar: str = "WEEKENDS"
    fixed_rate: Optional[float] = None
    index: Optional[IborIndex] = None
    stub_indices: tuple[IborIndex, ...] = ()

    @property
    def indices(self) -> tuple[IborIndex, ...]:
        found: list[IborIndex] = []
        for idx in ((self.index,) if self.index else ()) + tuple(self.stub_indices):
            if idx not in found:
                found.append(idx)
        return tuple(found)

    def _validate(self) -> None:
        if (self.fixed_rate is None) == (self.index is None):
            raise InvalidProductError("swap leg needs exactly one of fixed_rate and index")
        if self.end_date <= self.start_date:
            raise InvalidProductError(
                f"swap leg end date {self.end_date} must be after start date {self.start_date}"
            )
        if self.frequency_months <= 0:
            raise InvalidProductError("swap leg frequency must be a positive number of months")
        if self.stub_indices and self.index is None:
            raise InvalidProductError("stub indices require a floating leg")
        if len(self.stub_indices) > 2:
            raise InvalidProductError("at most two stub indices can be interpolated")
        for idx in self.indices:
            if idx.currency != self.currency:
                raise InvalidProductError(
                    f"index {idx} currency {idx.currency} differs from leg currency {self.currency}"
                )

    def unadjusted_dates(self) -> list[date]:
        """Period boundaries rolled backward from the end date."""
        dates = [self.end_date]
        n = 1
        while True:
            d = add_months(self.end_date, -n * self.frequency_months)
            if d <= self.start_date:
                break
            dates.append(d)
            n += 1
        dates.append(self.start_date)
        return list(reversed(dates))

    def _observation(
        self, period_start: date, is_stub: bool, reference_data: ReferenceData
    ) -> RateObservation:
        if self.fixed_rate is not None:
            return FixedRateObservation(self.fixed_rate)
        if self.index is None:
            raise InvalidProductError("swap leg needs exactly one of fixed_rate and index")
        if is_stub and self.stub_indices:
            first = self.stub_indices[0]
            fixing = first.fixing_date(period_start, reference_data.calendar(first.calendar))
            if len(self.stub_indices) == 1:
                return IborRateObservation.of(first, fixing, reference_data)
            return IborInterpolatedRateObservation.of(
                first, self.stub_indices[1], fixing, reference_data
            )
        fixing = self.index.fixing_date(period_start, reference_data.calendar(self.index.calendar))
        return IborRateObservation.of(self.index, fixing, reference_data)

    def expand(self, reference_data: ReferenceData) -> "ExpandedSwapLeg":
        self._validate()
        holidays = reference_data.calendar(self.calendar)
        unadjusted = self.unadjusted_dates()
        has_stub = add_months(unadjusted[1], -self.frequency_months) != unadjusted[0]
        adjusted = [holidays.modified_following(d) for d in unadjusted]
        notional = self.pay_receive.normalize(self.notional)
        periods = []
        for i, (start, end) in enumerate(zip(adjusted[:-1], adjusted[1:])):
            periods.append(
                RatePaymentPeriod(
                    payment_date=end,
                    start_date=start,
                    end_date=end,
                    year_fraction=self.day_count.year_fraction(start, end),
                    rate_observation=self._observation(start, i == 0 and has_stub, reference_data),
                    notional=notional,
                    currency=self.currency,
                )
            )
        return ExpandedSwapLeg(self.currency, tuple(periods))


@dataclass(frozen=True)
class RatePaymentPeriod:
    """One accrual period paid on its end date; `notional` is signed."""

    payment_date: date
    start_date: date
    end_date: date
    year_fraction: float
    rate_observation: RateObservation
    notional: float
    currency: str


@dataclass(frozen=True)
class ExpandedSwapLeg:
    currency: str
    periods: tuple[RatePaymentPeriod, ...]

    @property
    def indices(self) -> tuple[IborIndex, ...]:
        found: list[IborIndex] = []
        for period in self.periods:
            for idx in observed_indices(period.rate_observation):
                if idx not in found:
                    found.append(idx)
        return tuple(found)
