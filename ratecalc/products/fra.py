"""
Forward rate agreement (instrument data only; pricing via the FRA pricer).

`Fra` is the trade-level definition; `expand()` resolves its fixing and the
index observation once, producing the immutable `ExpandedFra` consumed by
pricers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional, Union

from ratecalc.conventions import DayCount
from ratecalc.errors import InvalidProductError
from ratecalc.indices import IborIndex
from ratecalc.observations import (
    IborInterpolatedRateObservation,
    IborRateObservation,
    observed_indices,
)
from ratecalc.products.common import BuySell
from ratecalc.reference_data import ReferenceData


class FraDiscounting(str, Enum):
    """Settlement convention of the FRA payment, fixed when the product is expanded."""

    ISDA = "ISDA"
    NONE = "NONE"
    AFMA = "AFMA"


@dataclass(frozen=True)
class Fra:
    """
    FRA: BUY pays `fixed_rate` and receives the index rate over [start_date, end_date].

    Settled on `payment_date` (default: the start date). When `index_interpolated`
    is set, the floating rate is interpolated between the two indices.
    """

    buy_sell: BuySell
    notional: float
    start_date: date
    end_date: date
    fixed_rate: float
    index: IborIndex
    index_interpolated: Optional[IborIndex] = None
    payment_date: Optional[date] = None
    day_count: Optional[DayCount] = None
    discounting: FraDiscounting = FraDiscounting.ISDA

    @property
    def currency(self) -> str:
        return self.index.currency

    @property
    def indices(self) -> tuple[IborIndex, ...]:
        if self.index_interpolated is None:
            return (self.index,)
        return (self.index, self.index_interpolated)

    def with_fixed_rate(self, fixed_rate: float) -> "Fra":
        return replace(self, fixed_rate=fixed_rate)

    def expand(self, reference_data: ReferenceData) -> "ExpandedFra":
        if self.end_date <= self.start_date:
            raise InvalidProductError(
                f"FRA end date {self.end_date} must be after start date {self.start_date}"
            )
        holidays = reference_data.calendar(self.index.calendar)
        fixing_date = self.index.fixing_date(self.start_date, holidays)
        observation: Union[IborRateObservation, IborInterpolatedRateObservation]
        if self.index_interpolated is None:
            observation = IborRateObservation.of(self.index, fixing_date, reference_data)
        else:
            observation = IborInterpolatedRateObservation.of(
                self.index, self.index_interpolated, fixing_date, reference_data
            )
        day_count = self.day_count or self.index.day_count
        return ExpandedFra(
            currency=self.currency,
            notional=self.buy_sell.normalize(self.notional),
            start_date=self.start_date,
            end_date=self.end_date,
            payment_date=self.payment_date or self.start_date,
            year_fraction=day_count.year_fraction(self.start_date, self.end_date),
            fixed_rate=self.fixed_rate,
            floating_rate=observation,
            discounting=self.discounting,
        )


@dataclass(frozen=True)
class ExpandedFra:
    """Schedule-free FRA economics; `notional` is signed (positive when buying)."""

    currency: str
    notional: float
    start_date: date
    end_date: date
    payment_date: date
    year_fraction: float
    fixed_rate: float
    floating_rate: Union[IborRateObservation, IborInterpolatedRateObservation]
    discounting: FraDiscounting = FraDiscounting.ISDA

    @property
    def indices(self) -> tuple[IborIndex, ...]:
        return observed_indices(self.floating_rate)
