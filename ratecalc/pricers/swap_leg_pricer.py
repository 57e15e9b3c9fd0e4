"""Discounting pricer for swap legs: each period is priced on its own and summed."""

from __future__ import annotations

from ratecalc.cashflow import CashFlow, CashFlows
from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.pricers.base import BasePricer
from ratecalc.products.swap_leg import ExpandedSwapLeg, RatePaymentPeriod
from ratecalc.sensitivity import PointSensitivities


class DiscountingSwapLegPricer(BasePricer):
    """
    Pricer for expanded swap legs.

    Period future value = notional * rate * year fraction, paid on the period
    end. Periods paid before the valuation date contribute nothing.
    """

    product_type = ExpandedSwapLeg

    def _unpaid(self, leg: ExpandedSwapLeg, view: MarketDataView) -> list[RatePaymentPeriod]:
        return [p for p in leg.periods if p.payment_date >= view.valuation_date]

    def period_rate(self, period: RatePaymentPeriod, view: MarketDataView) -> float:
        return self._rate_engine.rate(period.rate_observation, period.start_date, period.end_date, view)

    def period_future_value(self, period: RatePaymentPeriod, view: MarketDataView) -> float:
        return period.notional * period.year_fraction * self.period_rate(period, view)

    def future_value(self, leg: ExpandedSwapLeg, view: MarketDataView) -> CurrencyAmount:
        total = sum(self.period_future_value(p, view) for p in self._unpaid(leg, view))
        return CurrencyAmount(leg.currency, total)

    def present_value(self, leg: ExpandedSwapLeg, view: MarketDataView) -> CurrencyAmount:
        periods = self._unpaid(leg, view)
        if not periods:
            return CurrencyAmount.zero(leg.currency)
        discount = view.discount_factors(leg.currency)
        total = sum(
            self.period_future_value(p, view) * discount.discount_factor(p.payment_date)
            for p in periods
        )
        return CurrencyAmount(leg.currency, total)

    def _period_rate_sensitivity(self, period: RatePaymentPeriod, view: MarketDataView) -> PointSensitivities:
        return self._rate_engine.rate_sensitivity(
            period.rate_observation, period.start_date, period.end_date, view
        ).multiplied_by(period.notional * period.year_fraction)

    def future_value_sensitivity(self, leg: ExpandedSwapLeg, view: MarketDataView) -> PointSensitivities:
        sens = PointSensitivities.empty()
        for period in self._unpaid(leg, view):
            sens = sens.combined_with(self._period_rate_sensitivity(period, view))
        return sens

    def present_value_sensitivity(self, leg: ExpandedSwapLeg, view: MarketDataView) -> PointSensitivities:
        periods = self._unpaid(leg, view)
        sens = PointSensitivities.empty()
        if not periods:
            return sens
        discount = view.discount_factors(leg.currency)
        for period in periods:
            df = discount.discount_factor(period.payment_date)
            fv = self.period_future_value(period, view)
            sens = sens.combined_with(self._period_rate_sensitivity(period, view).multiplied_by(df))
            sens = sens.combined_with(discount.point_sensitivity(period.payment_date).multiplied_by(fv))
        return sens

    def cash_flows(self, leg: ExpandedSwapLeg, view: MarketDataView) -> CashFlows:
        return CashFlows(
            CashFlow(p.payment_date, CurrencyAmount(leg.currency, self.period_future_value(p, view)))
            for p in self._unpaid(leg, view)
        )
