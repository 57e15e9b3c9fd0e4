"""GraphQL types for the calculation API."""

from __future__ import annotations

from datetime import date
from typing import Optional

import strawberry


# --- Input types (request payloads) ---


@strawberry.input
class DiscountCurveInput:
    """Discount curve of a currency: pillars (year fractions), zero rates (continuously compounded)."""

    currency: str
    pillars: list[float]
    zero_rates_cc: list[float]


@strawberry.input
class IndexCurveInput:
    """Forward curve of an index (e.g. USD-LIBOR-3M), same shape as a discount curve."""

    index: str
    pillars: list[float]
    zero_rates_cc: list[float]


@strawberry.input
class FixingSeriesInput:
    """Historical fixings of an index."""

    index: str
    fixing_dates: list[date]
    rates: list[float]


@strawberry.input
class FxRateInput:
    """FX rate for a pair (e.g. GBPUSD: USD per GBP)."""

    pair: str
    rate: float


@strawberry.input
class MarketInput:
    """Market snapshot; `scenario_shifts_bp` turns it into one scenario per parallel shift."""

    valuation_date: date
    discount_curves: list[DiscountCurveInput]
    index_curves: Optional[list[IndexCurveInput]] = None
    fixings: Optional[list[FixingSeriesInput]] = None
    fx_rates: Optional[list[FxRateInput]] = None
    scenario_shifts_bp: Optional[list[float]] = None


@strawberry.input
class FraInput:
    """Forward rate agreement; BUY pays the fixed rate."""

    id: str
    notional: float
    start_date: date
    end_date: date
    fixed_rate: float
    index: str
    index_interpolated: Optional[str] = None
    buy_sell: str = "BUY"
    discounting: str = "ISDA"


@strawberry.input
class TermDepositInput:
    """Fixed-rate term deposit; BUY lends the notional."""

    id: str
    currency: str
    notional: float
    start_date: date
    end_date: date
    rate: float
    buy_sell: str = "BUY"
    day_count: str = "ACT/360"


@strawberry.input
class CalculationInput:
    """Trades x measures over the market scenarios, optionally in a reporting currency."""

    market: MarketInput
    measures: list[str]
    fras: Optional[list[FraInput]] = None
    deposits: Optional[list[TermDepositInput]] = None
    reporting_currency: Optional[str] = None


# --- Output types (response payloads) ---


@strawberry.type
class SensitivityOutput:
    """One point sensitivity: to an index forward rate or to a discount curve zero rate."""

    kind: str
    risk_factor: str
    point_date: date
    currency: str
    sensitivity: float


@strawberry.type
class CashFlowOutput:
    payment_date: date
    currency: str
    amount: float


@strawberry.type
class ValueOutput:
    """Value of a cell in one scenario; the populated field depends on the measure."""

    currency: Optional[str] = None
    amount: Optional[float] = None
    rate: Optional[float] = None
    sensitivities: Optional[list[SensitivityOutput]] = None
    cash_flows: Optional[list[CashFlowOutput]] = None


@strawberry.type
class CellOutput:
    """Result of one (trade, measure) cell; `values` has one entry per scenario."""

    trade_id: str
    measure: str
    success: bool
    failure_reason: Optional[str] = None
    failure_message: Optional[str] = None
    values: list[ValueOutput] = strawberry.field(default_factory=list)


@strawberry.type
class CalculationOutput:
    valuation_date: date
    scenario_count: int
    cells: list[CellOutput]
