"""Parallel PV01 risk measure (bump-and-reprice)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.pricers.base import BasePricer
from ratecalc.risk.base import BaseRiskMeasure


@dataclass
class PV01Parallel(BaseRiskMeasure):
    """Parallel PV01: PV change when every curve of the view is shifted together.

    With `curve_name` set, only the discount or index curve stored under that
    key is shifted.
    """

    pricer: BasePricer
    bump_bp: float = 1.0
    curve_name: str | None = None

    @property
    def name(self) -> str:
        return f"PV01_{self.curve_name}" if self.curve_name else "PV01"

    def _bumped_view(self, view: MarketDataView) -> MarketDataView:
        bump = self.bump_bp / 10000.0
        if self.curve_name is None:
            return view.bumped(bump)
        if self.curve_name in view.discount_curves:
            view = view.with_discount_curve(
                self.curve_name, view.discount_curves[self.curve_name].bumped(bump)
            )
        if self.curve_name in view.index_curves:
            view = view.with_index_curve(
                self.curve_name, view.index_curves[self.curve_name].bumped(bump)
            )
        return view

    def compute(self, product: Any, view: MarketDataView) -> CurrencyAmount:
        """PV(bumped) - PV(base)."""
        base = self.pricer.present_value(product, view)
        bumped = self.pricer.present_value(product, self._bumped_view(view))
        return bumped.minus(base)
