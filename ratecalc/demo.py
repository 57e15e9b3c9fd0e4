"""Demo: USD curves, a FRA, a term deposit and a swap leg valued over three curve scenarios."""

from datetime import date

from ratecalc.curves import ZeroRateCurve
from ratecalc.functions import create_default_functions
from ratecalc.indices import USD_LIBOR_3M, USD_LIBOR_6M
from ratecalc.logging import configure_logging
from ratecalc.measures import Measure
from ratecalc.products import BuySell, Fra, PayReceive, SwapLeg, TermDeposit
from ratecalc.result import ScenarioArray
from ratecalc.runner import CalculationRules, CalculationRunner
from ratecalc.scenario import ScenarioMarketData
from ratecalc.settings import get_settings
from ratecalc.timeseries import FixingSeries
from ratecalc.trades import FraTrade, SwapLegTrade, TermDepositTrade, TradeInfo


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    valuation_date = date(2024, 3, 15)
    pillars = [0.25, 0.5, 1.0, 2.0, 5.0]
    usd_disc = ZeroRateCurve(name="USD-DISC", pillars=pillars, zero_rates_cc=[0.051, 0.050, 0.048, 0.045, 0.042])
    libor_3m = ZeroRateCurve(name="USD-LIBOR-3M", pillars=pillars, zero_rates_cc=[0.053, 0.052, 0.050, 0.047, 0.044])
    libor_6m = ZeroRateCurve(name="USD-LIBOR-6M", pillars=pillars, zero_rates_cc=[0.054, 0.053, 0.051, 0.048, 0.045])

    base = ScenarioMarketData.single(
        valuation_date,
        discount_curves={"USD": usd_disc},
        index_curves={USD_LIBOR_3M.name: libor_3m, USD_LIBOR_6M.name: libor_6m},
        time_series={
            USD_LIBOR_3M.name: FixingSeries({date(2024, 1, 11): 0.0556, date(2024, 3, 13): 0.0531}),
        },
    )
    market_data = base.with_parallel_shifts([-0.0010, 0.0, 0.0010])

    trades = [
        FraTrade(
            Fra(
                buy_sell=BuySell.BUY,
                notional=10_000_000,
                start_date=date(2024, 6, 17),
                end_date=date(2024, 9, 17),
                fixed_rate=0.052,
                index=USD_LIBOR_3M,
            ),
            TradeInfo(id="FRA-3X6"),
        ),
        TermDepositTrade(
            TermDeposit(
                buy_sell=BuySell.BUY,
                currency="USD",
                notional=5_000_000,
                start_date=date(2024, 3, 19),
                end_date=date(2024, 9, 19),
                rate=0.05,
            ),
            TradeInfo(id="DEP-6M"),
        ),
        SwapLegTrade(
            SwapLeg(
                pay_receive=PayReceive.RECEIVE,
                currency="USD",
                notional=20_000_000,
                start_date=date(2024, 1, 15),
                end_date=date(2026, 1, 15),
                frequency_months=3,
                index=USD_LIBOR_3M,
            ),
            TradeInfo(id="LEG-2Y"),
        ),
    ]
    measures = [Measure.PRESENT_VALUE, Measure.PAR_RATE, Measure.PV01]
    rules = CalculationRules(functions=create_default_functions())

    with CalculationRunner(max_workers=settings.max_workers) as runner:
        results = runner.calculate(rules, trades, measures, market_data)

    print("=== Scenario Valuation Demo ===\n")
    print(f"Valuation date {valuation_date}; scenarios: -10bp, base, +10bp\n")
    for row, trade_id in enumerate(results.trade_ids):
        print(trade_id)
        for column, measure in enumerate(results.measures):
            result = results.get(row, column)
            if result.is_failure:
                print(f"   {measure.value:<14} FAILED ({result.failure.reason.value}): {result.failure.message}")
                continue
            values = result.value if isinstance(result.value, ScenarioArray) else [result.value]
            shown = ", ".join(
                f"{getattr(v, 'amount', v):,.6f}" if measure is Measure.PAR_RATE
                else f"{getattr(v, 'amount', v):,.2f}"
                for v in values
            )
            print(f"   {measure.value:<14} {shown}")
        print()
    print("Done.")


if __name__ == "__main__":
    main()
