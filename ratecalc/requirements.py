"""
Market data requirements of a trade and measure.

Keys are small frozen value objects so requirement sets can be unioned across
a whole run and compared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union


@dataclass(frozen=True, order=True)
class DiscountCurveKey:
    currency: str

    def __str__(self) -> str:
        return f"discount curve for currency {self.currency}"


@dataclass(frozen=True, order=True)
class IndexCurveKey:
    index: str

    def __str__(self) -> str:
        return f"forward curve for index {self.index}"


@dataclass(frozen=True, order=True)
class IndexRateKey:
    """Fixing time series of an index."""

    index: str

    def __str__(self) -> str:
        return f"fixing series for index {self.index}"


CurveKey = Union[DiscountCurveKey, IndexCurveKey]


def _sort_key(key: CurveKey) -> tuple[str, str]:
    return type(key).__name__, str(key)


@dataclass(frozen=True)
class CalculationRequirements:
    curves: frozenset[CurveKey] = field(default_factory=frozenset)
    time_series: frozenset[IndexRateKey] = field(default_factory=frozenset)
    output_currencies: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "CalculationRequirements":
        return cls()

    @classmethod
    def of(
        cls,
        curves: Iterable[CurveKey] = (),
        time_series: Iterable[IndexRateKey] = (),
        output_currencies: Iterable[str] = (),
    ) -> "CalculationRequirements":
        return cls(frozenset(curves), frozenset(time_series), frozenset(output_currencies))

    def union(self, other: "CalculationRequirements") -> "CalculationRequirements":
        return CalculationRequirements(
            self.curves | other.curves,
            self.time_series | other.time_series,
            self.output_currencies | other.output_currencies,
        )

    @classmethod
    def combine(cls, requirements: Iterable["CalculationRequirements"]) -> "CalculationRequirements":
        combined = cls.empty()
        for req in requirements:
            combined = combined.union(req)
        return combined

    def sorted_curves(self) -> list[CurveKey]:
        return sorted(self.curves, key=_sort_key)
