"""Measures a calculation run can ask for."""

from __future__ import annotations

from enum import Enum


class Measure(str, Enum):
    PRESENT_VALUE = "PRESENT_VALUE"
    FUTURE_VALUE = "FUTURE_VALUE"
    PRESENT_VALUE_SENSITIVITY = "PRESENT_VALUE_SENSITIVITY"
    FUTURE_VALUE_SENSITIVITY = "FUTURE_VALUE_SENSITIVITY"
    PAR_RATE = "PAR_RATE"
    PAR_SPREAD = "PAR_SPREAD"
    CASH_FLOWS = "CASH_FLOWS"
    PV01 = "PV01"

    @property
    def discounts(self) -> bool:
        """True if the measure reads the discount curve of the cash-flow currency."""
        return self in _DISCOUNTING_MEASURES


_DISCOUNTING_MEASURES = frozenset(
    {Measure.PRESENT_VALUE, Measure.PRESENT_VALUE_SENSITIVITY, Measure.PV01}
)
