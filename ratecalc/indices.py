"""
IBOR-style rate indices.

An index is identified by its name (e.g. "GBP-LIBOR-3M"); market data for it
(forward curve, fixing series) is keyed by that name. Date arithmetic follows
the usual money-market rules: the deposit underlying a fixing starts a number
of business days after the fixing date and ends one tenor later, adjusted
modified-following.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ratecalc.conventions import DayCount, HolidayCalendar, add_months


@dataclass(frozen=True)
class IborIndex:
    """
    Term rate index definition.

    - `tenor_months`: length of the underlying deposit.
    - `effective_offset_days`: business days from fixing date to effective date.
    - `calendar`: name of the holiday calendar in reference data.
    """

    name: str
    currency: str
    tenor_months: int
    day_count: DayCount = DayCount.ACT_360
    effective_offset_days: int = 2
    calendar: str = "WEEKENDS"

    def __str__(self) -> str:
        return self.name

    def effective_date(self, fixing_date: date, holidays: HolidayCalendar) -> date:
        return holidays.shift(fixing_date, self.effective_offset_days)

    def fixing_date(self, effective_date: date, holidays: HolidayCalendar) -> date:
        return holidays.shift(effective_date, -self.effective_offset_days)

    def maturity_date(self, effective_date: date, holidays: HolidayCalendar) -> date:
        return holidays.modified_following(add_months(effective_date, self.tenor_months))


USD_LIBOR_3M = IborIndex(name="USD-LIBOR-3M", currency="USD", tenor_months=3)
USD_LIBOR_6M = IborIndex(name="USD-LIBOR-6M", currency="USD", tenor_months=6)
GBP_LIBOR_3M = IborIndex(
    name="GBP-LIBOR-3M", currency="GBP", tenor_months=3,
    day_count=DayCount.ACT_365F, effective_offset_days=0,
)
GBP_LIBOR_6M = IborIndex(
    name="GBP-LIBOR-6M", currency="GBP", tenor_months=6,
    day_count=DayCount.ACT_365F, effective_offset_days=0,
)
EUR_EURIBOR_2M = IborIndex(name="EUR-EURIBOR-2M", currency="EUR", tenor_months=2)
EUR_EURIBOR_3M = IborIndex(name="EUR-EURIBOR-3M", currency="EUR", tenor_months=3)
EUR_EURIBOR_6M = IborIndex(name="EUR-EURIBOR-6M", currency="EUR", tenor_months=6)

_CATALOGUE = {
    idx.name: idx
    for idx in (
        USD_LIBOR_3M, USD_LIBOR_6M, GBP_LIBOR_3M, GBP_LIBOR_6M,
        EUR_EURIBOR_2M, EUR_EURIBOR_3M, EUR_EURIBOR_6M,
    )
}


def index_names() -> list[str]:
    return sorted(_CATALOGUE)


def ibor_index(name: str) -> IborIndex:
    """Look up a catalogued index by name, e.g. 'USD-LIBOR-3M'."""
    try:
        return _CATALOGUE[name]
    except KeyError:
        raise ValueError(f"unknown index '{name}'. Known indices: {index_names()}") from None
