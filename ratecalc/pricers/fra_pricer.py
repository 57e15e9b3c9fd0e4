"""
Discounting pricer for forward rate agreements.

Future value of one unit of notional, with forward rate F, fixed rate K and
accrual year fraction a:

    ISDA:  a (F - K) / (1 + a F)
    NONE:  a (F - K)
    AFMA:  -(1 / (1 + a F) - 1 / (1 + a K))

Present value is future value times the discount factor to the payment date.
A FRA whose payment date is before the valuation date is worth zero and reads
no market data.
"""

from __future__ import annotations

from ratecalc.cashflow import CashFlow, CashFlows
from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.pricers.base import BasePricer
from ratecalc.products.fra import ExpandedFra, FraDiscounting
from ratecalc.sensitivity import PointSensitivities


class DiscountingFraProductPricer(BasePricer):
    """Pricer for expanded FRAs."""

    product_type = ExpandedFra

    def _is_settled(self, fra: ExpandedFra, view: MarketDataView) -> bool:
        return fra.payment_date < view.valuation_date

    def forward_rate(self, fra: ExpandedFra, view: MarketDataView) -> float:
        return self._rate_engine.rate(fra.floating_rate, fra.start_date, fra.end_date, view)

    @staticmethod
    def _unit_amount(fra: ExpandedFra, forward_rate: float) -> float:
        af, k = fra.year_fraction, fra.fixed_rate
        if fra.discounting is FraDiscounting.ISDA:
            return af * (forward_rate - k) / (1.0 + af * forward_rate)
        if fra.discounting is FraDiscounting.NONE:
            return af * (forward_rate - k)
        if fra.discounting is FraDiscounting.AFMA:
            return -(1.0 / (1.0 + af * forward_rate) - 1.0 / (1.0 + af * k))
        raise ValueError(f"unknown FRA discounting {fra.discounting!r}")

    @staticmethod
    def _unit_derivative(fra: ExpandedFra, forward_rate: float) -> float:
        """d(unit amount)/dF."""
        af, k = fra.year_fraction, fra.fixed_rate
        if fra.discounting is FraDiscounting.ISDA:
            return af * (1.0 + af * k) / (1.0 + af * forward_rate) ** 2
        if fra.discounting is FraDiscounting.NONE:
            return af
        if fra.discounting is FraDiscounting.AFMA:
            return af / (1.0 + af * forward_rate) ** 2
        raise ValueError(f"unknown FRA discounting {fra.discounting!r}")

    def future_value(self, fra: ExpandedFra, view: MarketDataView) -> CurrencyAmount:
        if self._is_settled(fra, view):
            return CurrencyAmount.zero(fra.currency)
        forward = self.forward_rate(fra, view)
        return CurrencyAmount(fra.currency, fra.notional * self._unit_amount(fra, forward))

    def present_value(self, fra: ExpandedFra, view: MarketDataView) -> CurrencyAmount:
        if self._is_settled(fra, view):
            return CurrencyAmount.zero(fra.currency)
        df = view.discount_factor(fra.currency, fra.payment_date)
        return self.future_value(fra, view).multiplied_by(df)

    def future_value_sensitivity(self, fra: ExpandedFra, view: MarketDataView) -> PointSensitivities:
        if self._is_settled(fra, view):
            return PointSensitivities.empty()
        forward = self.forward_rate(fra, view)
        rate_sens = self._rate_engine.rate_sensitivity(
            fra.floating_rate, fra.start_date, fra.end_date, view
        )
        return rate_sens.multiplied_by(fra.notional * self._unit_derivative(fra, forward))

    def present_value_sensitivity(self, fra: ExpandedFra, view: MarketDataView) -> PointSensitivities:
        """Forward-rate entries scaled by the discount factor, then the discount-curve entry."""
        if self._is_settled(fra, view):
            return PointSensitivities.empty()
        discount = view.discount_factors(fra.currency)
        df = discount.discount_factor(fra.payment_date)
        fv = self.future_value(fra, view).amount
        fv_sens = self.future_value_sensitivity(fra, view).multiplied_by(df)
        df_sens = discount.point_sensitivity(fra.payment_date).multiplied_by(fv)
        return fv_sens.combined_with(df_sens)

    def par_rate(self, fra: ExpandedFra, view: MarketDataView) -> float:
        """Fixed rate zeroing the future value: the forward rate, whatever the discounting."""
        return self.forward_rate(fra, view)

    def par_spread(self, fra: ExpandedFra, view: MarketDataView) -> float:
        return self.par_rate(fra, view) - fra.fixed_rate

    def cash_flows(self, fra: ExpandedFra, view: MarketDataView) -> CashFlows:
        return CashFlows.of(CashFlow(fra.payment_date, self.future_value(fra, view)))
