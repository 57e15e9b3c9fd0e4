"""Direction flags shared by products."""

from __future__ import annotations

from enum import Enum


class BuySell(str, Enum):
    """Trade direction; BUY carries a positive signed notional."""

    BUY = "BUY"
    SELL = "SELL"

    def normalize(self, amount: float) -> float:
        return abs(amount) if self is BuySell.BUY else -abs(amount)


class PayReceive(str, Enum):
    """Leg direction; RECEIVE carries a positive signed notional."""

    PAY = "PAY"
    RECEIVE = "RECEIVE"

    def normalize(self, amount: float) -> float:
        return abs(amount) if self is PayReceive.RECEIVE else -abs(amount)
