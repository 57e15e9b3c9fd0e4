"""Valuation engine for interest-rate products: market views, pricers, scenario runs."""

from ratecalc.cashflow import CashFlow, CashFlows
from ratecalc.conventions import DayCount, HolidayCalendar
from ratecalc.curves import ZeroRateCurve
from ratecalc.errors import (
    AmbiguousMarketDataError,
    CalculationCancelledError,
    InvalidProductError,
    MissingMarketDataError,
    PricingError,
    UnsupportedCalculationError,
    UnsupportedTradeError,
)
from ratecalc.functions import CalculationFunctions, create_default_functions
from ratecalc.fx import CurrencyAmount, FxMatrix
from ratecalc.indices import IborIndex
from ratecalc.interfaces import Curve, FxConvertible, FxRateProvider
from ratecalc.market import MarketDataView, RiskFactorKind
from ratecalc.measures import Measure
from ratecalc.observations import (
    FixedRateObservation,
    IborInterpolatedRateObservation,
    IborRateObservation,
)
from ratecalc.pricers import (
    BasePricer,
    DiscountingFraProductPricer,
    DiscountingSwapLegPricer,
    DiscountingTermDepositProductPricer,
)
from ratecalc.pricing import calculate, price
from ratecalc.products import (
    BuySell,
    Fra,
    FraDiscounting,
    PayReceive,
    SwapLeg,
    TermDeposit,
)
from ratecalc.rate_engine import RateObservationEngine, create_default_rate_engine
from ratecalc.reference_data import ReferenceData
from ratecalc.requirements import (
    CalculationRequirements,
    DiscountCurveKey,
    IndexCurveKey,
    IndexRateKey,
)
from ratecalc.result import Failure, FailureReason, Result, Results, ScenarioArray
from ratecalc.risk import PV01Parallel, pv01_parallel
from ratecalc.runner import CalculationRules, CalculationRunner, RunState
from ratecalc.scenario import ScenarioData, ScenarioMarketData
from ratecalc.sensitivity import (
    IborRateSensitivity,
    PointSensitivities,
    ZeroRateSensitivity,
)
from ratecalc.timeseries import FixingSeries
from ratecalc.trades import FraTrade, ProductKind, SwapLegTrade, TermDepositTrade, TradeInfo

__all__ = [
    "AmbiguousMarketDataError",
    "BasePricer",
    "BuySell",
    "CalculationCancelledError",
    "CalculationFunctions",
    "CalculationRequirements",
    "CalculationRules",
    "CalculationRunner",
    "CashFlow",
    "CashFlows",
    "Curve",
    "CurrencyAmount",
    "DayCount",
    "DiscountCurveKey",
    "DiscountingFraProductPricer",
    "DiscountingSwapLegPricer",
    "DiscountingTermDepositProductPricer",
    "Failure",
    "FailureReason",
    "FixedRateObservation",
    "FixingSeries",
    "Fra",
    "FraDiscounting",
    "FraTrade",
    "FxConvertible",
    "FxMatrix",
    "FxRateProvider",
    "HolidayCalendar",
    "IborIndex",
    "IborInterpolatedRateObservation",
    "IborRateObservation",
    "IborRateSensitivity",
    "IndexCurveKey",
    "IndexRateKey",
    "InvalidProductError",
    "MarketDataView",
    "Measure",
    "MissingMarketDataError",
    "PayReceive",
    "PointSensitivities",
    "PricingError",
    "ProductKind",
    "PV01Parallel",
    "RateObservationEngine",
    "ReferenceData",
    "Result",
    "Results",
    "RiskFactorKind",
    "RunState",
    "ScenarioArray",
    "ScenarioData",
    "ScenarioMarketData",
    "SwapLeg",
    "SwapLegTrade",
    "TermDeposit",
    "TermDepositTrade",
    "TradeInfo",
    "UnsupportedCalculationError",
    "UnsupportedTradeError",
    "ZeroRateCurve",
    "ZeroRateSensitivity",
    "calculate",
    "create_default_functions",
    "create_default_rate_engine",
    "price",
    "pv01_parallel",
]
