"""Integration tests for the GraphQL calculate query."""

from datetime import date

from fastapi.testclient import TestClient

from ratecalc.curves import ZeroRateCurve
from ratecalc.indices import USD_LIBOR_3M
from ratecalc.market import MarketDataView
from ratecalc.measures import Measure
from ratecalc.pricing import calculate
from ratecalc.products import BuySell, Fra, TermDeposit
from ratecalc.trades import FraTrade, TermDepositTrade

from ratecalc_api.main import app


client = TestClient(app)

MARKET = """
market: {
  valuationDate: "2024-03-15"
  discountCurves: [{ currency: "USD", pillars: [0.5, 1.0, 2.0], zeroRatesCc: [0.050, 0.048, 0.045] }]
  indexCurves: [{ index: "USD-LIBOR-3M", pillars: [0.5, 1.0, 2.0], zeroRatesCc: [0.052, 0.050, 0.047] }]
  %s
}
"""

FRA = """
fras: [{
  id: "FRA-3X6"
  notional: 10000000
  startDate: "2024-06-17"
  endDate: "2024-09-17"
  fixedRate: 0.052
  index: "USD-LIBOR-3M"
}]
"""

CELLS = """
{
  valuationDate
  scenarioCount
  cells {
    tradeId
    measure
    success
    failureReason
    failureMessage
    values { currency amount rate sensitivities { kind riskFactor pointDate sensitivity } cashFlows { paymentDate amount } }
  }
}
"""


def _query(measures: str, extra_market: str = "", trades: str = FRA, extra: str = "") -> dict:
    query = "query { calculate(request: { %s measures: [%s] %s %s }) %s }" % (
        MARKET % extra_market, measures, trades, extra, CELLS
    )
    response = client.post("/graphql", json={"query": query})
    assert response.status_code == 200
    return response.json()


def _library_view() -> MarketDataView:
    return MarketDataView(
        date(2024, 3, 15),
        discount_curves={"USD": ZeroRateCurve("USD", [0.5, 1.0, 2.0], [0.050, 0.048, 0.045])},
        index_curves={"USD-LIBOR-3M": ZeroRateCurve("USD-LIBOR-3M", [0.5, 1.0, 2.0], [0.052, 0.050, 0.047])},
    )


def _library_fra() -> FraTrade:
    return FraTrade(
        Fra(
            buy_sell=BuySell.BUY,
            notional=10_000_000,
            start_date=date(2024, 6, 17),
            end_date=date(2024, 9, 17),
            fixed_rate=0.052,
            index=USD_LIBOR_3M,
        )
    )


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_indices_query() -> None:
    response = client.post("/graphql", json={"query": "{ version indices }"})
    data = response.json()["data"]
    assert data["version"] == "0.1.0"
    assert "USD-LIBOR-3M" in data["indices"]


def test_fra_measures_match_library() -> None:
    """PV and par rate equal the single-trade library calculation."""
    data = _query('"PRESENT_VALUE", "PAR_RATE", "PRESENT_VALUE_SENSITIVITY", "CASH_FLOWS"')
    assert "errors" not in data
    result = data["data"]["calculate"]
    assert result["valuationDate"] == "2024-03-15"
    assert result["scenarioCount"] == 1
    pv_cell, par_cell, sens_cell, flows_cell = result["cells"]
    assert all(cell["success"] for cell in result["cells"])
    assert pv_cell["tradeId"] == "FRA-3X6"

    view = _library_view()
    pv = calculate(_library_fra(), Measure.PRESENT_VALUE, view)
    assert pv_cell["values"][0]["currency"] == "USD"
    assert abs(pv_cell["values"][0]["amount"] - pv.amount) < 1e-6
    par = calculate(_library_fra(), Measure.PAR_RATE, view)
    assert abs(par_cell["values"][0]["rate"] - par) < 1e-12

    kinds = [s["kind"] for s in sens_cell["values"][0]["sensitivities"]]
    assert kinds == ["IborRate", "ZeroRate"]
    assert sens_cell["values"][0]["sensitivities"][0]["pointDate"] == "2024-06-13"
    assert flows_cell["values"][0]["cashFlows"][0]["paymentDate"] == "2024-06-17"


def test_scenario_shifts() -> None:
    data = _query('"PAR_RATE"', extra_market="scenarioShiftsBp: [-10, 0, 10]")
    result = data["data"]["calculate"]
    assert result["scenarioCount"] == 3
    rates = [v["rate"] for v in result["cells"][0]["values"]]
    assert len(rates) == 3
    assert rates[0] < rates[1] < rates[2]


def test_missing_curve_is_failed_cell() -> None:
    """A FRA on an index without a curve fails its cells, not the request."""
    trades = FRA.replace('index: "USD-LIBOR-3M"', 'index: "USD-LIBOR-6M"')
    data = _query('"PRESENT_VALUE"', trades=trades)
    assert "errors" not in data
    cell = data["data"]["calculate"]["cells"][0]
    assert cell["success"] is False
    assert cell["failureReason"] == "MISSING_DATA"
    assert cell["failureMessage"] == "no forward curve for index USD-LIBOR-6M in scenario 0"
    assert cell["values"] == []


def test_deposit_reporting_currency() -> None:
    deposits = """
    deposits: [{
      id: "DEP-GBP"
      currency: "GBP"
      notional: 1000000
      startDate: "2024-03-19"
      endDate: "2024-09-19"
      rate: 0.045
    }]
    """
    extra_market = """
    fxRates: [{ pair: "GBPUSD", rate: 1.6 }]
    """
    market = MARKET.replace('currency: "USD"', 'currency: "GBP"')
    query = "query { calculate(request: { %s measures: [\"PRESENT_VALUE\"] %s reportingCurrency: \"USD\" }) %s }" % (
        market % extra_market, deposits, CELLS
    )
    data = client.post("/graphql", json={"query": query}).json()
    assert "errors" not in data
    value = data["data"]["calculate"]["cells"][0]["values"][0]
    assert value["currency"] == "USD"
    gbp_view = MarketDataView(
        date(2024, 3, 15),
        discount_curves={"GBP": ZeroRateCurve("GBP", [0.5, 1.0, 2.0], [0.050, 0.048, 0.045])},
    )
    deposit = TermDepositTrade(
        TermDeposit(
            buy_sell=BuySell.BUY,
            currency="GBP",
            notional=1_000_000,
            start_date=date(2024, 3, 19),
            end_date=date(2024, 9, 19),
            rate=0.045,
        )
    )
    gbp_pv = calculate(deposit, Measure.PRESENT_VALUE, gbp_view)
    assert abs(value["amount"] - gbp_pv.amount * 1.6) < 1e-6


def test_unknown_measure_is_an_error() -> None:
    data = _query('"VEGA"')
    assert "errors" in data
    assert "measures: unknown value 'VEGA'" in data["errors"][0]["message"]


def test_unknown_index_is_an_error() -> None:
    trades = FRA.replace('index: "USD-LIBOR-3M"', 'index: "USD-LIBOR-1W"')
    data = _query('"PRESENT_VALUE"', trades=trades)
    assert "errors" in data
    assert "unknown index 'USD-LIBOR-1W'" in data["errors"][0]["message"]


def test_request_without_trades_is_an_error() -> None:
    data = _query('"PRESENT_VALUE"', trades="")
    assert "errors" in data
    assert "at least one trade" in data["errors"][0]["message"]
