"""
Risk measures implemented via "bump and reprice".

PV01Parallel is the composable form; pv01_parallel is a functional shortcut.
"""

from __future__ import annotations

from typing import Any

from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.pricers.base import BasePricer
from ratecalc.risk.base import BaseRiskMeasure
from ratecalc.risk.pv01 import PV01Parallel


def pv01_parallel(
    pricer: BasePricer,
    product: Any,
    view: MarketDataView,
    bump_bp: float = 1.0,
    curve_name: str | None = None,
) -> CurrencyAmount:
    """
    PV01: change in PV when curves are bumped by bump_bp basis points (parallel).
    bump_bp is in basis points; bump = bump_bp / 10000 (additive to zero rates).
    Returns PV(bumped) - PV(base).
    """
    return PV01Parallel(pricer=pricer, bump_bp=bump_bp, curve_name=curve_name).compute(product, view)


__all__ = ["BaseRiskMeasure", "PV01Parallel", "pv01_parallel"]
