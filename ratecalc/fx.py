"""
Currency amounts and the FX rate matrix.

`FxMatrix` stores quoted pairs and derives inverse and cross rates on demand;
cross rates go through one intermediate currency (usually the base currency
every pair is quoted against, e.g. USD).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ratecalc.errors import MissingMarketDataError
from ratecalc.interfaces import FxRateProvider


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount of money in a single currency."""

    currency: str
    amount: float

    @classmethod
    def zero(cls, currency: str) -> "CurrencyAmount":
        return cls(currency, 0.0)

    def multiplied_by(self, factor: float) -> "CurrencyAmount":
        return CurrencyAmount(self.currency, self.amount * factor)

    def plus(self, other: "CurrencyAmount") -> "CurrencyAmount":
        if other.currency != self.currency:
            raise ValueError(
                f"cannot add {other.currency} amount to {self.currency} amount"
            )
        return CurrencyAmount(self.currency, self.amount + other.amount)

    def minus(self, other: "CurrencyAmount") -> "CurrencyAmount":
        return self.plus(other.multiplied_by(-1.0))

    def converted_to(self, currency: str, fx: FxRateProvider) -> "CurrencyAmount":
        if currency == self.currency:
            return self
        return CurrencyAmount(currency, self.amount * fx.fx_rate(self.currency, currency))


def split_pair(pair: str) -> tuple[str, str]:
    """Split 'EURUSD' or 'EUR/USD' into ('EUR', 'USD')."""
    cleaned = pair.replace("/", "").upper()
    if len(cleaned) != 6:
        raise ValueError(f"invalid currency pair '{pair}'")
    return cleaned[:3], cleaned[3:]


class FxMatrix:
    """
    Immutable set of FX rates: (base, counter) -> counter units per base unit.

    Immutable-style: with_rate returns a new matrix.
    """

    def __init__(self, rates: Mapping[tuple[str, str], float] | None = None) -> None:
        self._rates = MappingProxyType(dict(rates) if rates else {})

    @classmethod
    def empty(cls) -> "FxMatrix":
        return cls()

    @classmethod
    def of(cls, base: str, counter: str, rate: float) -> "FxMatrix":
        return cls({(base, counter): rate})

    @classmethod
    def from_pairs(cls, quotes: Mapping[str, float]) -> "FxMatrix":
        """Build from pair strings, e.g. {'GBPUSD': 1.6}."""
        return cls({split_pair(pair): rate for pair, rate in quotes.items()})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FxMatrix):
            return NotImplemented
        return dict(self._rates) == dict(other._rates)

    def __repr__(self) -> str:
        return f"FxMatrix({dict(self._rates)})"

    @property
    def currencies(self) -> frozenset[str]:
        return frozenset(c for pair in self._rates for c in pair)

    def with_rate(self, base: str, counter: str, rate: float) -> "FxMatrix":
        rates = dict(self._rates)
        rates[(base, counter)] = rate
        return FxMatrix(rates)

    def _direct(self, base: str, counter: str) -> float | None:
        if (base, counter) in self._rates:
            return self._rates[(base, counter)]
        if (counter, base) in self._rates:
            return 1.0 / self._rates[(counter, base)]
        return None

    def fx_rate(self, base: str, counter: str) -> float:
        """Rate converting `base` into `counter`, derived through a cross if needed."""
        if base == counter:
            return 1.0
        direct = self._direct(base, counter)
        if direct is not None:
            return direct
        for via in sorted(self.currencies - {base, counter}):
            leg1 = self._direct(base, via)
            leg2 = self._direct(via, counter)
            if leg1 is not None and leg2 is not None:
                return leg1 * leg2
        raise MissingMarketDataError(
            f"no FX rate for {base}/{counter}", key=(base, counter)
        )
