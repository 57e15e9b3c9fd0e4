"""Discounting pricer for term deposits."""

from __future__ import annotations

from ratecalc.cashflow import CashFlow, CashFlows
from ratecalc.fx import CurrencyAmount
from ratecalc.market import MarketDataView
from ratecalc.pricers.base import BasePricer
from ratecalc.products.deposit import ExpandedTermDeposit
from ratecalc.sensitivity import PointSensitivities


class DiscountingTermDepositProductPricer(BasePricer):
    """
    Pricer for expanded term deposits.

    PV = -N * DF(start) + (N + interest) * DF(end). The start flow is dropped
    once the start date has passed and the deposit is worth zero after its end.
    """

    product_type = ExpandedTermDeposit

    def present_value(self, deposit: ExpandedTermDeposit, view: MarketDataView) -> CurrencyAmount:
        if deposit.end_date < view.valuation_date:
            return CurrencyAmount.zero(deposit.currency)
        discount = view.discount_factors(deposit.currency)
        pv = (deposit.notional + deposit.interest) * discount.discount_factor(deposit.end_date)
        if deposit.start_date >= view.valuation_date:
            pv -= deposit.notional * discount.discount_factor(deposit.start_date)
        return CurrencyAmount(deposit.currency, pv)

    def present_value_sensitivity(
        self, deposit: ExpandedTermDeposit, view: MarketDataView
    ) -> PointSensitivities:
        if deposit.end_date < view.valuation_date:
            return PointSensitivities.empty()
        discount = view.discount_factors(deposit.currency)
        sens = PointSensitivities.empty()
        if deposit.start_date >= view.valuation_date:
            sens = discount.point_sensitivity(deposit.start_date).multiplied_by(-deposit.notional)
        end_sens = discount.point_sensitivity(deposit.end_date).multiplied_by(
            deposit.notional + deposit.interest
        )
        return sens.combined_with(end_sens)

    def par_rate(self, deposit: ExpandedTermDeposit, view: MarketDataView) -> float:
        """Rate making the deposit worth zero: (DF(start) / DF(end) - 1) / year fraction."""
        discount = view.discount_factors(deposit.currency)
        df_start = discount.discount_factor(deposit.start_date)
        df_end = discount.discount_factor(deposit.end_date)
        return (df_start / df_end - 1.0) / deposit.year_fraction

    def par_spread(self, deposit: ExpandedTermDeposit, view: MarketDataView) -> float:
        return self.par_rate(deposit, view) - deposit.rate

    def cash_flows(self, deposit: ExpandedTermDeposit, view: MarketDataView) -> CashFlows:
        flows = []
        if deposit.start_date >= view.valuation_date:
            flows.append(CashFlow(deposit.start_date, CurrencyAmount(deposit.currency, -deposit.notional)))
        if deposit.end_date >= view.valuation_date:
            flows.append(
                CashFlow(
                    deposit.end_date,
                    CurrencyAmount(deposit.currency, deposit.notional + deposit.interest),
                )
            )
        return CashFlows(flows)
