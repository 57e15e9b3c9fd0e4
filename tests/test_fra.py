"""Tests for FRA expansion and the discounting FRA pricer."""

import math
from datetime import date

import pytest

from ratecalc.curves import ZeroRateCurve
from ratecalc.errors import InvalidProductError, MissingMarketDataError
from ratecalc.indices import EUR_EURIBOR_2M, EUR_EURIBOR_3M, USD_LIBOR_3M
from ratecalc.market import MarketDataView
from ratecalc.observations import IborInterpolatedRateObservation, IborRateObservation
from ratecalc.pricers import DiscountingFraProductPricer
from ratecalc.products import BuySell, Fra, FraDiscounting
from ratecalc.rate_engine import create_default_rate_engine
from ratecalc.reference_data import ReferenceData
from ratecalc.sensitivity import IborRateSensitivity, PointSensitivities, ZeroRateSensitivity
from ratecalc.timeseries import FixingSeries

VAL = date(2024, 3, 15)
REF = ReferenceData.standard()
NOTIONAL = 1_000_000.0
FORWARD = 0.052
START = date(2024, 6, 17)
END = date(2024, 9, 17)


def _fra(discounting: FraDiscounting = FraDiscounting.ISDA, **kwargs) -> Fra:
    fields = dict(
        buy_sell=BuySell.BUY,
        notional=NOTIONAL,
        start_date=START,
        end_date=END,
        fixed_rate=0.05,
        index=USD_LIBOR_3M,
        discounting=discounting,
    )
    fields.update(kwargs)
    return Fra(**fields)


def _stub_pricer(forward: float = FORWARD) -> DiscountingFraProductPricer:
    """Pricer whose index observations return a fixed forward with unit sensitivity."""
    engine = create_default_rate_engine()
    engine.register(
        IborRateObservation,
        lambda obs, start, end, view: forward,
        lambda obs, start, end, view: PointSensitivities.of(
            IborRateSensitivity(obs.index.name, obs.fixing_date, obs.index.currency, 1.0)
        ),
    )
    return DiscountingFraProductPricer(engine)


def _discount_view() -> MarketDataView:
    return MarketDataView(VAL, discount_curves={"USD": ZeroRateCurve.flat("USD-DISC", 0.05)})


def test_expand_resolves_fixing_and_defaults() -> None:
    """Fixing two business days before the start, paid on the start date."""
    expanded = _fra().expand(REF)
    assert expanded.floating_rate.fixing_date == date(2024, 6, 13)
    assert expanded.payment_date == START
    assert abs(expanded.year_fraction - 92 / 360) < 1e-15
    assert expanded.notional == NOTIONAL
    assert expanded.indices == (USD_LIBOR_3M,)


def test_expand_sell_and_explicit_payment() -> None:
    expanded = _fra(buy_sell=BuySell.SELL, payment_date=date(2024, 6, 18)).expand(REF)
    assert expanded.notional == -NOTIONAL
    assert expanded.payment_date == date(2024, 6, 18)


def test_expand_interpolated() -> None:
    """An interpolated index pair produces an interpolated observation."""
    fra = _fra(index=EUR_EURIBOR_3M, index_interpolated=EUR_EURIBOR_2M)
    expanded = fra.expand(REF)
    assert isinstance(expanded.floating_rate, IborInterpolatedRateObservation)
    assert expanded.floating_rate.short_index is EUR_EURIBOR_2M
    assert expanded.currency == "EUR"
    assert fra.indices == (EUR_EURIBOR_3M, EUR_EURIBOR_2M)


def test_expand_rejects_inverted_dates() -> None:
    with pytest.raises(InvalidProductError, match="must be after start date"):
        _fra(start_date=END, end_date=START).expand(REF)


@pytest.mark.parametrize(
    "discounting, unit",
    [
        (FraDiscounting.ISDA, lambda af, f, k: af * (f - k) / (1 + af * f)),
        (FraDiscounting.NONE, lambda af, f, k: af * (f - k)),
        (FraDiscounting.AFMA, lambda af, f, k: -(1 / (1 + af * f) - 1 / (1 + af * k))),
    ],
)
def test_future_and_present_value(discounting, unit) -> None:
    """FV follows the settlement formula; PV discounts it to the payment date."""
    pricer = _stub_pricer()
    view = _discount_view()
    fra = _fra(discounting).expand(REF)
    expected_fv = NOTIONAL * unit(fra.year_fraction, FORWARD, 0.05)
    fv = pricer.future_value(fra, view)
    assert fv.currency == "USD"
    assert abs(fv.amount - expected_fv) < 1e-8
    df = math.exp(-0.05 * (START - VAL).days / 365)
    assert abs(pricer.present_value(fra, view).amount - expected_fv * df) < 1e-8


@pytest.mark.parametrize("discounting", list(FraDiscounting))
def test_future_value_sensitivity_matches_finite_difference(discounting) -> None:
    """Analytic dFV/dF against a central difference on the forward rate."""
    view = _discount_view()
    fra = _fra(discounting).expand(REF)
    h = 1e-6
    up = _stub_pricer(FORWARD + h).future_value(fra, view).amount
    down = _stub_pricer(FORWARD - h).future_value(fra, view).amount
    numeric = (up - down) / (2 * h)
    sens = _stub_pricer().future_value_sensitivity(fra, view)
    assert len(sens) == 1
    assert abs(sens[0].sensitivity - numeric) < NOTIONAL * 1e-9


@pytest.mark.parametrize("discounting", list(FraDiscounting))
def test_par_rate_zeroes_present_value(discounting) -> None:
    """Re-striking at the par rate gives zero PV for every convention."""
    pricer = _stub_pricer()
    view = _discount_view()
    fra = _fra(discounting)
    par = pricer.par_rate(fra.expand(REF), view)
    assert par == FORWARD
    assert abs(pricer.par_spread(fra.expand(REF), view) - (FORWARD - 0.05)) < 1e-15
    at_par = fra.with_fixed_rate(par).expand(REF)
    assert abs(pricer.present_value(at_par, view).amount) < 1e-8


def test_present_value_sensitivity_layout() -> None:
    """Forward-rate entry scaled by DF first, then the discount-curve entry."""
    pricer = _stub_pricer()
    view = _discount_view()
    fra = _fra().expand(REF)
    sens = pricer.present_value_sensitivity(fra, view)
    assert len(sens) == 2
    t = (START - VAL).days / 365
    df = math.exp(-0.05 * t)
    fv = pricer.future_value(fra, view).amount
    fv_sens = pricer.future_value_sensitivity(fra, view)[0].sensitivity

    rate_entry, discount_entry = sens
    assert isinstance(rate_entry, IborRateSensitivity)
    assert rate_entry.fixing_date == date(2024, 6, 13)
    assert abs(rate_entry.sensitivity - fv_sens * df) < 1e-6
    assert isinstance(discount_entry, ZeroRateSensitivity)
    assert discount_entry.curve_date == START
    assert abs(discount_entry.sensitivity - (-t * df * fv)) < 1e-6


@pytest.mark.parametrize("discounting", list(FraDiscounting))
def test_present_value_sensitivity_matches_finite_difference(discounting) -> None:
    """Both PV sensitivity entries against central differences on the forward and the discount rate."""
    fra = _fra(discounting).expand(REF)
    h = 1e-6

    def pv(forward: float, discount_rate: float) -> float:
        view = MarketDataView(VAL, discount_curves={"USD": ZeroRateCurve.flat("USD-DISC", discount_rate)})
        return _stub_pricer(forward).present_value(fra, view).amount

    rate_entry, discount_entry = _stub_pricer().present_value_sensitivity(fra, _discount_view())
    numeric_rate = (pv(FORWARD + h, 0.05) - pv(FORWARD - h, 0.05)) / (2 * h)
    numeric_discount = (pv(FORWARD, 0.05 + h) - pv(FORWARD, 0.05 - h)) / (2 * h)
    assert abs(rate_entry.sensitivity - numeric_rate) < NOTIONAL * 1e-9
    assert abs(discount_entry.sensitivity - numeric_discount) < NOTIONAL * 1e-9


def test_sell_is_negated_buy() -> None:
    pricer = _stub_pricer()
    view = _discount_view()
    buy = pricer.present_value(_fra().expand(REF), view).amount
    sell = pricer.present_value(_fra(buy_sell=BuySell.SELL).expand(REF), view).amount
    assert abs(buy + sell) < 1e-9


def test_settled_fra_reads_no_market_data() -> None:
    """A FRA paid before the valuation date is worth zero even on an empty view."""
    pricer = DiscountingFraProductPricer()
    fra = _fra(start_date=date(2024, 1, 15), end_date=date(2024, 4, 15)).expand(REF)
    empty = MarketDataView(VAL)
    assert pricer.present_value(fra, empty).amount == 0.0
    assert pricer.future_value(fra, empty).amount == 0.0
    assert len(pricer.present_value_sensitivity(fra, empty)) == 0


def test_forward_from_curves() -> None:
    """With the default engine the forward is implied from the index curve."""
    view = _discount_view().with_index_curve(
        USD_LIBOR_3M.name, ZeroRateCurve.flat("USD-LIBOR-3M", 0.053)
    )
    fra = _fra().expand(REF)
    obs = fra.floating_rate
    t1 = (obs.effective_date - VAL).days / 365
    t2 = (obs.maturity_date - VAL).days / 365
    expected = (math.exp(0.053 * (t2 - t1)) - 1) / obs.year_fraction
    assert abs(DiscountingFraProductPricer().par_rate(fra, view) - expected) < 1e-12


def test_fixed_fra_uses_fixing_and_has_no_rate_sensitivity() -> None:
    """Once fixed, only the discount-curve sensitivity remains."""
    valuation = date(2024, 3, 18)
    fra = _fra(start_date=date(2024, 3, 19), end_date=date(2024, 6, 19)).expand(REF)
    assert fra.floating_rate.fixing_date == date(2024, 3, 15)
    view = MarketDataView(
        valuation,
        discount_curves={"USD": ZeroRateCurve.flat("USD-DISC", 0.05)},
        time_series={USD_LIBOR_3M.name: FixingSeries.of(date(2024, 3, 15), 0.0531)},
    )
    pricer = DiscountingFraProductPricer()
    assert pricer.par_rate(fra, view) == 0.0531
    sens = pricer.present_value_sensitivity(fra, view)
    assert all(isinstance(p, ZeroRateSensitivity) for p in sens)
    assert len(sens) == 1


def test_missing_discount_curve_raises() -> None:
    pricer = _stub_pricer()
    with pytest.raises(MissingMarketDataError, match="no discount curve for currency USD"):
        pricer.present_value(_fra().expand(REF), MarketDataView(VAL))


def test_cash_flow_is_future_value_on_payment_date() -> None:
    pricer = _stub_pricer()
    view = _discount_view()
    fra = _fra().expand(REF)
    flows = pricer.cash_flows(fra, view)
    assert len(flows) == 1
    assert flows[0].payment_date == START
    assert flows[0].future_value == pricer.future_value(fra, view)
