"""Historical index fixings as an immutable, date-ordered series."""

from __future__ import annotations

import bisect
from datetime import date
from typing import Iterator, Mapping


class FixingSeries:
    """
    Ordered map of fixing date -> rate.

    The series is append-only: `with_fixing` returns a new series and refuses
    to overwrite or insert before existing history, so a series placed in a
    market view can never be changed retroactively.
    """

    __slots__ = ("_dates", "_values")

    def __init__(self, fixings: Mapping[date, float] | None = None) -> None:
        items = sorted((fixings or {}).items())
        self._dates: tuple[date, ...] = tuple(d for d, _ in items)
        self._values: tuple[float, ...] = tuple(float(v) for _, v in items)

    @classmethod
    def of(cls, fixing_date: date, rate: float) -> "FixingSeries":
        return cls({fixing_date: rate})

    @classmethod
    def empty(cls) -> "FixingSeries":
        return cls()

    def __len__(self) -> int:
        return len(self._dates)

    def __iter__(self) -> Iterator[tuple[date, float]]:
        return iter(zip(self._dates, self._values))

    def __contains__(self, fixing_date: object) -> bool:
        return self.get(fixing_date) is not None  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixingSeries):
            return NotImplemented
        return self._dates == other._dates and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._dates, self._values))

    def __repr__(self) -> str:
        return f"FixingSeries({dict(self)})"

    @property
    def latest_date(self) -> date | None:
        return self._dates[-1] if self._dates else None

    def get(self, fixing_date: date) -> float | None:
        """Return the fixing on `fixing_date`, or None if there is none."""
        i = bisect.bisect_left(self._dates, fixing_date)
        if i < len(self._dates) and self._dates[i] == fixing_date:
            return self._values[i]
        return None

    def with_fixing(self, fixing_date: date, rate: float) -> "FixingSeries":
        """Return a new series with one more fixing after the latest one."""
        if self._dates and fixing_date <= self._dates[-1]:
            raise ValueError(
                f"fixing on {fixing_date} must be after the latest fixing {self._dates[-1]}"
            )
        fixings = dict(self)
        fixings[fixing_date] = rate
        return FixingSeries(fixings)
