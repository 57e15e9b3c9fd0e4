"""
Point sensitivities: derivatives of a measure with respect to single risk factors.

Two risk-factor kinds exist:
- `IborRateSensitivity`: to the forward rate of an index at a fixing date.
- `ZeroRateSensitivity`: to the continuously compounded zero rate of a
  currency's discount curve at a date.

`PointSensitivities` keeps the order in which entries were produced (pricers
rely on "rate entry first, discount entry second"); `normalized()` merges
entries on the same risk factor and sorts them for deterministic comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Iterator, Union

from ratecalc.interfaces import FxRateProvider


@dataclass(frozen=True)
class IborRateSensitivity:
    """Sensitivity to an index forward rate at a fixing date."""

    index: str
    fixing_date: date
    currency: str
    sensitivity: float

    @property
    def risk_factor(self) -> tuple:
        return ("IborRateSensitivity", self.currency, self.fixing_date, self.index)

    def with_sensitivity(self, sensitivity: float) -> "IborRateSensitivity":
        return replace(self, sensitivity=sensitivity)


@dataclass(frozen=True)
class ZeroRateSensitivity:
    """Sensitivity to the zero rate of the discount curve of `curve_currency`."""

    curve_currency: str
    curve_date: date
    currency: str
    sensitivity: float

    @property
    def risk_factor(self) -> tuple:
        return ("ZeroRateSensitivity", self.currency, self.curve_date, self.curve_currency)

    def with_sensitivity(self, sensitivity: float) -> "ZeroRateSensitivity":
        return replace(self, sensitivity=sensitivity)


PointSensitivity = Union[IborRateSensitivity, ZeroRateSensitivity]


class PointSensitivities:
    """Immutable ordered collection of point sensitivities."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[PointSensitivity] = ()) -> None:
        self._points: tuple[PointSensitivity, ...] = tuple(points)

    @classmethod
    def empty(cls) -> "PointSensitivities":
        return cls()

    @classmethod
    def of(cls, *points: PointSensitivity) -> "PointSensitivities":
        return cls(points)

    def __iter__(self) -> Iterator[PointSensitivity]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, i: int) -> PointSensitivity:
        return self._points[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSensitivities):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"PointSensitivities({list(self._points)})"

    @property
    def sensitivities(self) -> tuple[PointSensitivity, ...]:
        return self._points

    def multiplied_by(self, factor: float) -> "PointSensitivities":
        return PointSensitivities(p.with_sensitivity(p.sensitivity * factor) for p in self._points)

    def combined_with(self, other: "PointSensitivities") -> "PointSensitivities":
        """Concatenate, keeping this collection's entries first."""
        return PointSensitivities(self._points + other._points)

    def normalized(self) -> "PointSensitivities":
        """Merge entries with identical risk factors and sort them."""
        merged: dict[tuple, PointSensitivity] = {}
        for point in self._points:
            key = point.risk_factor
            if key in merged:
                existing = merged[key]
                merged[key] = existing.with_sensitivity(existing.sensitivity + point.sensitivity)
            else:
                merged[key] = point
        return PointSensitivities(sorted(merged.values(), key=lambda p: p.risk_factor))

    def converted_to(self, currency: str, fx: FxRateProvider) -> "PointSensitivities":
        """Express every entry in `currency`; the risk factors themselves are unchanged."""
        converted = []
        for point in self._points:
            if point.currency == currency:
                converted.append(point)
            else:
                rate = fx.fx_rate(point.currency, currency)
                converted.append(replace(point, currency=currency, sensitivity=point.sensitivity * rate))
        return PointSensitivities(converted)

    def total(self) -> float:
        return sum(p.sensitivity for p in self._points)
