"""Projected cash flows, reported by the CASH_FLOWS measure (not used for valuation)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator

from ratecalc.fx import CurrencyAmount
from ratecalc.interfaces import FxRateProvider


@dataclass(frozen=True)
class CashFlow:
    """A projected (future value) amount paid on a date."""

    payment_date: date
    future_value: CurrencyAmount

    def converted_to(self, currency: str, fx: FxRateProvider) -> "CashFlow":
        return CashFlow(self.payment_date, self.future_value.converted_to(currency, fx))


class CashFlows:
    """Immutable, payment-date ordered list of cash flows."""

    __slots__ = ("_flows",)

    def __init__(self, flows: Iterable[CashFlow] = ()) -> None:
        self._flows: tuple[CashFlow, ...] = tuple(sorted(flows, key=lambda f: f.payment_date))

    @classmethod
    def of(cls, *flows: CashFlow) -> "CashFlows":
        return cls(flows)

    def __iter__(self) -> Iterator[CashFlow]:
        return iter(self._flows)

    def __len__(self) -> int:
        return len(self._flows)

    def __getitem__(self, i: int) -> CashFlow:
        return self._flows[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CashFlows):
            return NotImplemented
        return self._flows == other._flows

    def __hash__(self) -> int:
        return hash(self._flows)

    def __repr__(self) -> str:
        return f"CashFlows({list(self._flows)})"

    def converted_to(self, currency: str, fx: FxRateProvider) -> "CashFlows":
        return CashFlows(f.converted_to(currency, fx) for f in self._flows)
