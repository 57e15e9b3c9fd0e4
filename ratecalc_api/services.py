"""Service layer: convert GraphQL inputs to library objects and run the calculation."""

from __future__ import annotations

from typing import Any

from ratecalc.cashflow import CashFlows
from ratecalc.conventions import DayCount
from ratecalc.curves import ZeroRateCurve
from ratecalc.functions import create_default_functions
from ratecalc.fx import CurrencyAmount, FxMatrix
from ratecalc.indices import ibor_index
from ratecalc.logging import get_logger
from ratecalc.measures import Measure
from ratecalc.products import BuySell, Fra, FraDiscounting, TermDeposit
from ratecalc.result import Result, ScenarioArray
from ratecalc.runner import CalculationRules, CalculationRunner
from ratecalc.scenario import ScenarioMarketData
from ratecalc.sensitivity import IborRateSensitivity, PointSensitivities
from ratecalc.settings import get_settings
from ratecalc.timeseries import FixingSeries
from ratecalc.trades import FraTrade, TermDepositTrade, TradeInfo

from ratecalc_api.types import (
    CalculationInput,
    CalculationOutput,
    CashFlowOutput,
    CellOutput,
    FraInput,
    MarketInput,
    SensitivityOutput,
    TermDepositInput,
    ValueOutput,
)

logger = get_logger(__name__)


def _enum_value(enum_type: Any, value: str, field: str) -> Any:
    try:
        return enum_type(value.upper() if enum_type is not DayCount else value)
    except ValueError:
        allowed = [m.value for m in enum_type]
        raise ValueError(f"{field}: unknown value '{value}'. Allowed: {allowed}") from None


def _curve(name: str, pillars: list[float], zero_rates_cc: list[float]) -> ZeroRateCurve:
    try:
        return ZeroRateCurve(name=name, pillars=list(pillars), zero_rates_cc=list(zero_rates_cc))
    except ValueError as exc:
        raise ValueError(f"curve '{name}': {exc}") from None


def market_data_from_input(m: MarketInput) -> ScenarioMarketData:
    """Build (possibly multi-scenario) market data from GraphQL MarketInput."""
    if not m.discount_curves:
        raise ValueError("market.discountCurves must not be empty")
    discount = {c.currency: _curve(c.currency, c.pillars, c.zero_rates_cc) for c in m.discount_curves}
    index_curves = {}
    for c in m.index_curves or []:
        ibor_index(c.index)
        index_curves[c.index] = _curve(c.index, c.pillars, c.zero_rates_cc)
    time_series = {}
    for f in m.fixings or []:
        if len(f.fixing_dates) != len(f.rates):
            raise ValueError(f"fixings for {f.index}: fixingDates and rates must have the same length")
        time_series[f.index] = FixingSeries(dict(zip(f.fixing_dates, f.rates)))
    fx = FxMatrix.from_pairs({q.pair: q.rate for q in m.fx_rates or []})
    data = ScenarioMarketData.single(
        m.valuation_date,
        discount_curves=discount,
        index_curves=index_curves,
        fx_matrix=fx,
        time_series=time_series,
    )
    if m.scenario_shifts_bp:
        data = data.with_parallel_shifts([bp / 10000.0 for bp in m.scenario_shifts_bp])
    return data


def _fra_trade(f: FraInput) -> FraTrade:
    fra = Fra(
        buy_sell=_enum_value(BuySell, f.buy_sell, "buySell"),
        notional=f.notional,
        start_date=f.start_date,
        end_date=f.end_date,
        fixed_rate=f.fixed_rate,
        index=ibor_index(f.index),
        index_interpolated=ibor_index(f.index_interpolated) if f.index_interpolated else None,
        discounting=_enum_value(FraDiscounting, f.discounting, "discounting"),
    )
    return FraTrade(fra, TradeInfo(id=f.id))


def _deposit_trade(d: TermDepositInput) -> TermDepositTrade:
    deposit = TermDeposit(
        buy_sell=_enum_value(BuySell, d.buy_sell, "buySell"),
        currency=d.currency,
        notional=d.notional,
        start_date=d.start_date,
        end_date=d.end_date,
        rate=d.rate,
        day_count=_enum_value(DayCount, d.day_count, "dayCount"),
    )
    return TermDepositTrade(deposit, TradeInfo(id=d.id))


def _sensitivity_output(points: PointSensitivities) -> list[SensitivityOutput]:
    out = []
    for p in points.normalized():
        if isinstance(p, IborRateSensitivity):
            out.append(SensitivityOutput(
                kind="IborRate", risk_factor=p.index, point_date=p.fixing_date,
                currency=p.currency, sensitivity=p.sensitivity,
            ))
        else:
            out.append(SensitivityOutput(
                kind="ZeroRate", risk_factor=p.curve_currency, point_date=p.curve_date,
                currency=p.currency, sensitivity=p.sensitivity,
            ))
    return out


def _value_output(value: Any) -> ValueOutput:
    if isinstance(value, CurrencyAmount):
        return ValueOutput(currency=value.currency, amount=value.amount)
    if isinstance(value, PointSensitivities):
        return ValueOutput(sensitivities=_sensitivity_output(value))
    if isinstance(value, CashFlows):
        return ValueOutput(cash_flows=[
            CashFlowOutput(
                payment_date=f.payment_date,
                currency=f.future_value.currency,
                amount=f.future_value.amount,
            )
            for f in value
        ])
    return ValueOutput(rate=float(value))


def _cell_output(trade_id: str, measure: Measure, result: Result) -> CellOutput:
    if result.failure is not None:
        return CellOutput(
            trade_id=trade_id,
            measure=measure.value,
            success=False,
            failure_reason=result.failure.reason.value,
            failure_message=result.failure.message,
        )
    value = result.value
    values = list(value) if isinstance(value, ScenarioArray) else [value]
    return CellOutput(
        trade_id=trade_id,
        measure=measure.value,
        success=True,
        values=[_value_output(v) for v in values],
    )


def calculate(request: CalculationInput) -> CalculationOutput:
    """Run every requested measure for every trade over the market scenarios."""
    measures = [_enum_value(Measure, m, "measures") for m in request.measures]
    if not measures:
        raise ValueError("measures must not be empty")
    trades = [_fra_trade(f) for f in request.fras or []]
    trades += [_deposit_trade(d) for d in request.deposits or []]
    if not trades:
        raise ValueError("request must contain at least one trade")
    market_data = market_data_from_input(request.market)

    settings = get_settings()
    rules = CalculationRules(
        functions=create_default_functions(),
        reporting_currency=request.reporting_currency or settings.reporting_currency,
    )
    logger.info(
        "calculation_request",
        trades=len(trades),
        measures=len(measures),
        scenarios=market_data.scenario_count,
    )
    with CalculationRunner(max_workers=settings.max_workers) as runner:
        results = runner.calculate(rules, trades, measures, market_data)

    cells = [
        _cell_output(trade_id, measure, results.get(row, column))
        for row, trade_id in enumerate(results.trade_ids)
        for column, measure in enumerate(results.measures)
    ]
    return CalculationOutput(
        valuation_date=market_data.valuation_date,
        scenario_count=market_data.scenario_count,
        cells=cells,
    )
