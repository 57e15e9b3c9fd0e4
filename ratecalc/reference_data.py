"""Reference data: holiday calendars used when expanding trades into products."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ratecalc.conventions import NO_HOLIDAYS, WEEKENDS, HolidayCalendar
from ratecalc.errors import MissingMarketDataError


class ReferenceData:
    """
    Immutable lookup of holiday calendars by name.

    Reference data is static (it does not vary by scenario) and is only read
    while expanding trades, never while pricing.
    """

    def __init__(self, calendars: Mapping[str, HolidayCalendar] | None = None) -> None:
        self._calendars = MappingProxyType(dict(calendars) if calendars else {})

    @classmethod
    def standard(cls) -> "ReferenceData":
        return cls({NO_HOLIDAYS.name: NO_HOLIDAYS, WEEKENDS.name: WEEKENDS})

    def with_calendar(self, holiday_calendar: HolidayCalendar) -> "ReferenceData":
        calendars = dict(self._calendars)
        calendars[holiday_calendar.name] = holiday_calendar
        return ReferenceData(calendars)

    def calendar(self, name: str) -> HolidayCalendar:
        try:
            return self._calendars[name]
        except KeyError:
            raise MissingMarketDataError(
                f"no holiday calendar '{name}' in reference data. "
                f"Available calendars: {sorted(self._calendars)}",
                key=name,
            ) from None
