"""
Day-count and business-day conventions.

These are deliberately small pure functions: the engine only needs a year
fraction between two dates and a way to roll dates onto business days.
Full holiday catalogues are out of scope; a calendar is a set of weekend
weekdays plus an explicit set of holidays.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum


class DayCount(str, Enum):
    """Day-count conventions converting a date interval into a year fraction."""

    ACT_360 = "ACT/360"
    ACT_365F = "ACT/365F"
    ACT_ACT_ISDA = "ACT/ACT ISDA"
    THIRTY_360 = "30/360"

    def year_fraction(self, start: date, end: date) -> float:
        """Year fraction from start to end (negative if end is before start)."""
        if end < start:
            return -self.year_fraction(end, start)
        if self is DayCount.ACT_360:
            return (end - start).days / 360.0
        if self is DayCount.ACT_365F:
            return (end - start).days / 365.0
        if self is DayCount.THIRTY_360:
            d1 = min(start.day, 30)
            d2 = min(end.day, 30) if d1 == 30 else end.day
            days = 360 * (end.year - start.year) + 30 * (end.month - start.month) + d2 - d1
            return days / 360.0
        return _act_act_isda(start, end)


def _act_act_isda(start: date, end: date) -> float:
    # Split the interval by calendar year, each part over its own year length.
    if start.year == end.year:
        return (end - start).days / (366.0 if calendar.isleap(start.year) else 365.0)
    first = (date(start.year + 1, 1, 1) - start).days
    last = (end - date(end.year, 1, 1)).days
    return (
        first / (366.0 if calendar.isleap(start.year) else 365.0)
        + (end.year - start.year - 1)
        + last / (366.0 if calendar.isleap(end.year) else 365.0)
    )


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class HolidayCalendar:
    """
    Business-day calendar: weekend weekdays (Monday=0) plus explicit holidays.
    """

    name: str
    weekend_days: frozenset[int] = frozenset({5, 6})
    holidays: frozenset[date] = field(default_factory=frozenset)

    def is_business_day(self, d: date) -> bool:
        return d.weekday() not in self.weekend_days and d not in self.holidays

    def next_or_same(self, d: date) -> date:
        while not self.is_business_day(d):
            d += timedelta(days=1)
        return d

    def previous_or_same(self, d: date) -> date:
        while not self.is_business_day(d):
            d -= timedelta(days=1)
        return d

    def modified_following(self, d: date) -> date:
        """Roll forward to a business day unless that changes the month."""
        rolled = self.next_or_same(d)
        if rolled.month != d.month:
            return self.previous_or_same(d)
        return rolled

    def shift(self, d: date, business_days: int) -> date:
        """Move by a signed number of business days."""
        step = timedelta(days=1 if business_days >= 0 else -1)
        remaining = abs(business_days)
        while remaining > 0:
            d += step
            if self.is_business_day(d):
                remaining -= 1
        return d


NO_HOLIDAYS = HolidayCalendar(name="NONE", weekend_days=frozenset())
WEEKENDS = HolidayCalendar(name="WEEKENDS")
