"""Term deposit (instrument data only; pricing via the term deposit pricer)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ratecalc.conventions import DayCount
from ratecalc.errors import InvalidProductError
from ratecalc.products.common import BuySell
from ratecalc.reference_data import ReferenceData


@dataclass(frozen=True)
class TermDeposit:
    """
    Fixed-rate deposit: BUY lends `notional` on the start date and receives
    notional plus interest on the end date. Dates are adjusted modified-following
    on `calendar` when expanded.
    """

    buy_sell: BuySell
    currency: str
    notional: float
    start_date: date
    end_date: date
    rate: float
    day_count: DayCount = DayCount.ACT_360
    calendar: str = "WEEKENDS"

    def expand(self, reference_data: ReferenceData) -> "ExpandedTermDeposit":
        holidays = reference_data.calendar(self.calendar)
        start = holidays.modified_following(self.start_date)
        end = holidays.modified_following(self.end_date)
        if end <= start:
            raise InvalidProductError(
                f"deposit end date {end} must be after start date {start}"
            )
        year_fraction = self.day_count.year_fraction(start, end)
        notional = self.buy_sell.normalize(self.notional)
        return ExpandedTermDeposit(
            currency=self.currency,
            notional=notional,
            start_date=start,
            end_date=end,
            year_fraction=year_fraction,
            rate=self.rate,
            interest=notional * self.rate * year_fraction,
        )


@dataclass(frozen=True)
class ExpandedTermDeposit:
    currency: str
    notional: float
    start_date: date
    end_date: date
    year_fraction: float
    rate: float
    interest: float
