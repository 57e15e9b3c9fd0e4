"""Tests for parallel PV01."""

from datetime import date

from ratecalc.curves import ZeroRateCurve
from ratecalc.indices import USD_LIBOR_3M
from ratecalc.market import MarketDataView
from ratecalc.pricers import DiscountingFraProductPricer, DiscountingTermDepositProductPricer
from ratecalc.products import BuySell, Fra, TermDeposit
from ratecalc.reference_data import ReferenceData
from ratecalc.risk import PV01Parallel, pv01_parallel

VAL = date(2024, 3, 15)
REF = ReferenceData.standard()


def _view() -> MarketDataView:
    return MarketDataView(
        VAL,
        discount_curves={"USD": ZeroRateCurve(name="USD-DISC", pillars=[0.5, 2.0], zero_rates_cc=[0.05, 0.045])},
        index_curves={USD_LIBOR_3M.name: ZeroRateCurve.flat("USD-LIBOR-3M", 0.053)},
    )


def _deposit():
    return TermDeposit(
        buy_sell=BuySell.BUY,
        currency="USD",
        notional=5_000_000,
        start_date=date(2024, 3, 19),
        end_date=date(2024, 9, 19),
        rate=0.05,
    ).expand(REF)


def _fra():
    return Fra(
        buy_sell=BuySell.BUY,
        notional=10_000_000,
        start_date=date(2024, 6, 17),
        end_date=date(2024, 9, 17),
        fixed_rate=0.052,
        index=USD_LIBOR_3M,
    ).expand(REF)


def test_deposit_pv01_negative() -> None:
    """Lending: rates up => final flow worth less => PV01 negative."""
    pv01 = pv01_parallel(DiscountingTermDepositProductPricer(), _deposit(), _view())
    assert pv01.currency == "USD"
    assert pv01.amount < 0


def test_deposit_pv01_matches_point_sensitivity() -> None:
    """A 1bp parallel bump moves PV by the summed zero-rate sensitivity times 1e-4."""
    pricer = DiscountingTermDepositProductPricer()
    view = _view()
    deposit = _deposit()
    pv01 = pv01_parallel(pricer, deposit, view).amount
    total = pricer.present_value_sensitivity(deposit, view).total()
    assert abs(pv01 - total * 1e-4) < 0.05


def test_fra_pv01_is_bump_and_reprice() -> None:
    """PV01 equals repricing on a view with every curve shifted by 1bp."""
    pricer = DiscountingFraProductPricer()
    view = _view()
    fra = _fra()
    expected = pricer.present_value(fra, view.bumped(0.0001)).amount - pricer.present_value(fra, view).amount
    assert abs(pv01_parallel(pricer, fra, view).amount - expected) < 1e-9
    # Paying fixed on a FRA gains when forwards rise.
    assert expected > 0


def test_named_curve_bump() -> None:
    """Only the named curve is shifted."""
    pricer = DiscountingFraProductPricer()
    view = _view()
    fra = _fra()
    measure = PV01Parallel(pricer, bump_bp=1.0, curve_name="USD")
    assert measure.name == "PV01_USD"
    disc = view.discount_curves["USD"]
    manual = view.with_discount_curve("USD", disc.bumped(0.0001))
    expected = pricer.present_value(fra, manual).amount - pricer.present_value(fra, view).amount
    assert abs(measure.compute(fra, view).amount - expected) < 1e-9

    index_only = PV01Parallel(pricer, curve_name=USD_LIBOR_3M.name).compute(fra, view).amount
    both = PV01Parallel(pricer).compute(fra, view).amount
    assert abs(both - (index_only + expected)) < 0.05


def test_bump_size_scales() -> None:
    pricer = DiscountingTermDepositProductPricer()
    one = pv01_parallel(pricer, _deposit(), _view(), bump_bp=1.0).amount
    ten = pv01_parallel(pricer, _deposit(), _view(), bump_bp=10.0).amount
    assert PV01Parallel(pricer).name == "PV01"
    assert abs(ten - 10 * one) < abs(one) * 0.01
