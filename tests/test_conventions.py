"""Tests for day counts, holiday calendars, indices and reference data."""

from datetime import date

import pytest

from ratecalc.conventions import NO_HOLIDAYS, WEEKENDS, DayCount, HolidayCalendar, add_months
from ratecalc.errors import MissingMarketDataError
from ratecalc.indices import GBP_LIBOR_3M, USD_LIBOR_3M, ibor_index, index_names
from ratecalc.reference_data import ReferenceData


def test_act_360_and_act_365f() -> None:
    """Actual days over 360 / 365."""
    start, end = date(2024, 1, 1), date(2024, 7, 1)
    assert abs(DayCount.ACT_360.year_fraction(start, end) - 182 / 360) < 1e-15
    assert abs(DayCount.ACT_365F.year_fraction(start, end) - 182 / 365) < 1e-15


def test_year_fraction_negative_when_reversed() -> None:
    """End before start gives the negated year fraction."""
    start, end = date(2024, 3, 15), date(2024, 3, 8)
    assert abs(DayCount.ACT_365F.year_fraction(start, end) - (-7 / 365)) < 1e-15


def test_thirty_360_end_of_month() -> None:
    """30/360: day 31 counts as 30."""
    assert abs(DayCount.THIRTY_360.year_fraction(date(2024, 1, 31), date(2024, 2, 28)) - 28 / 360) < 1e-15
    assert abs(DayCount.THIRTY_360.year_fraction(date(2024, 1, 15), date(2025, 1, 15)) - 1.0) < 1e-15


def test_act_act_isda_splits_by_year() -> None:
    """ACT/ACT ISDA: each calendar year's days over that year's length."""
    expected = 184 / 365 + 182 / 366
    assert abs(DayCount.ACT_ACT_ISDA.year_fraction(date(2023, 7, 1), date(2024, 7, 1)) - expected) < 1e-15


def test_add_months_clamps_to_month_end() -> None:
    """Adding months never overflows into the next month."""
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert add_months(date(2023, 11, 30), 3) == date(2024, 2, 29)
    assert add_months(date(2024, 1, 15), 12) == date(2025, 1, 15)


def test_weekend_calendar_rolls() -> None:
    """Saturday 2024-03-16 rolls to Monday; month-end Saturday rolls back."""
    assert not WEEKENDS.is_business_day(date(2024, 3, 16))
    assert WEEKENDS.next_or_same(date(2024, 3, 16)) == date(2024, 3, 18)
    assert WEEKENDS.previous_or_same(date(2024, 3, 17)) == date(2024, 3, 15)
    assert WEEKENDS.modified_following(date(2024, 3, 30)) == date(2024, 3, 29)
    assert WEEKENDS.modified_following(date(2024, 6, 15)) == date(2024, 6, 17)


def test_business_day_shift() -> None:
    """Shifting skips weekends; the NONE calendar counts every day."""
    assert WEEKENDS.shift(date(2024, 3, 15), 2) == date(2024, 3, 19)
    assert WEEKENDS.shift(date(2024, 3, 18), -2) == date(2024, 3, 14)
    assert NO_HOLIDAYS.shift(date(2024, 3, 15), 2) == date(2024, 3, 17)


def test_explicit_holidays() -> None:
    """Explicit holidays are skipped like weekends."""
    cal = HolidayCalendar(name="X", holidays=frozenset({date(2024, 3, 18)}))
    assert cal.next_or_same(date(2024, 3, 16)) == date(2024, 3, 19)


def test_index_dates() -> None:
    """Fixing -> effective (+2 business days) -> maturity (+tenor, modified following)."""
    fixing = date(2024, 3, 13)
    effective = USD_LIBOR_3M.effective_date(fixing, WEEKENDS)
    assert effective == date(2024, 3, 15)
    assert USD_LIBOR_3M.maturity_date(effective, WEEKENDS) == date(2024, 6, 17)
    assert USD_LIBOR_3M.fixing_date(effective, WEEKENDS) == fixing
    # Same-day effective date.
    assert GBP_LIBOR_3M.effective_date(fixing, WEEKENDS) == fixing


def test_index_catalogue() -> None:
    """Indices are looked up by name; unknown names raise."""
    assert ibor_index("USD-LIBOR-3M") is USD_LIBOR_3M
    assert "EUR-EURIBOR-6M" in index_names()
    with pytest.raises(ValueError, match="unknown index 'USD-LIBOR-1W'"):
        ibor_index("USD-LIBOR-1W")


def test_reference_data_calendars() -> None:
    """Standard reference data holds NONE and WEEKENDS; missing calendars raise."""
    ref = ReferenceData.standard()
    assert ref.calendar("NONE") is NO_HOLIDAYS
    assert ref.calendar("WEEKENDS") is WEEKENDS
    with pytest.raises(MissingMarketDataError, match="no holiday calendar 'TARGET'"):
        ref.calendar("TARGET")
    target = HolidayCalendar(name="TARGET", holidays=frozenset({date(2024, 12, 25)}))
    extended = ref.with_calendar(target)
    assert extended.calendar("TARGET") is target
    with pytest.raises(MissingMarketDataError):
        ref.calendar("TARGET")
