"""
Scenario calculation runner.

`CalculationRunner.calculate` prices every (trade, measure) pair over every
scenario of the market data and returns a `Results` grid:

1. Resolve each trade's calculation function and the market data each
   (trade, measure) cell reads; a trade with no registered function fails
   the whole run.
2. Fan out one task per trade row on a thread pool owned by the call.
3. Each task expands the trade once, builds its own view per scenario and
   computes every measure. Missing data, unsupported measures, invalid input
   and arithmetic errors fail only that cell.
4. Values exposing `converted_to` are converted to the reporting currency when
   the rules ask for it; a failed conversion fails that cell only.
5. The grid is assembled after every task has finished, each row in its own
   position whatever the completion order.
"""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_COMPLETED, CancelledError, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from ratecalc.errors import (
    CalculationCancelledError,
    MissingMarketDataError,
    PricingError,
    UnsupportedTradeError,
)
from ratecalc.functions import CalculationFunction, CalculationFunctions
from ratecalc.interfaces import FxConvertible
from ratecalc.logging import get_logger
from ratecalc.market import MarketDataView
from ratecalc.measures import Measure
from ratecalc.reference_data import ReferenceData
from ratecalc.requirements import CalculationRequirements
from ratecalc.result import Failure, FailureReason, Result, Results, ScenarioArray
from ratecalc.scenario import ScenarioMarketData
from ratecalc.settings import get_settings

logger = get_logger(__name__)

# Interval at which the collecting thread re-checks for cancellation.
_POLL_SECONDS = 0.05


class RunState(str, Enum):
    CREATED = "CREATED"
    REQUIREMENTS_RESOLVED = "REQUIREMENTS_RESOLVED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class CalculationRules:
    """
    Configuration of one calculation run.

    - `functions`: registry dispatching trades to pricing functions.
    - `reporting_currency`: currency results are converted to (None: native currency).
    - `convert_currencies`: enables the conversion.
    """

    functions: CalculationFunctions
    reporting_currency: Optional[str] = None
    convert_currencies: bool = True


def _trade_id(trade: Any, row: int) -> str:
    info = getattr(trade, "info", None)
    trade_id = getattr(info, "id", "") if info is not None else ""
    return trade_id or f"trade-{row}"


class CalculationRunner:
    """
    Runs calculations on a worker pool scoped to each `calculate` call.

    The runner is a context manager; `close()` (from any thread) cancels the
    run in progress, which then raises `CalculationCancelledError`.
    """

    def __init__(self, max_workers: Optional[int] = None) -> None:
        self._max_workers = max_workers or get_settings().max_workers
        self._closed = threading.Event()
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._state = RunState.CREATED

    def __enter__(self) -> "CalculationRunner":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def state(self) -> RunState:
        """State of the most recent run."""
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Release the runner; a run in progress is cancelled."""
        self._closed.set()
        with self._lock:
            executor = self._executor
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

    def _transition(self, state: RunState, **context: Any) -> None:
        logger.debug("run_state", from_state=self._state.value, to_state=state.value, **context)
        self._state = state

    def calculate(
        self,
        rules: CalculationRules,
        trades: Sequence[Any],
        measures: Sequence[Measure],
        market_data: ScenarioMarketData,
        reference_data: Optional[ReferenceData] = None,
    ) -> Results:
        """Compute the (trade x measure) grid over every scenario of `market_data`."""
        if self._closed.is_set():
            raise CalculationCancelledError("calculation runner is closed")
        reference_data = reference_data or ReferenceData.standard()
        self._state = RunState.CREATED
        trade_ids = [_trade_id(trade, row) for row, trade in enumerate(trades)]

        try:
            functions = [rules.functions.function_for(trade) for trade in trades]
        except UnsupportedTradeError:
            self._transition(RunState.FAILED)
            logger.error("calculation_failed", reason="unsupported trade")
            raise
        requirements = [
            [function.requirements(trade, measure) for measure in measures]
            for trade, function in zip(trades, functions)
        ]
        run_requirements = CalculationRequirements.combine(r for row in requirements for r in row)
        self._transition(
            RunState.REQUIREMENTS_RESOLVED,
            curves=len(run_requirements.curves),
            time_series=len(run_requirements.time_series),
        )

        self._transition(
            RunState.RUNNING,
            trades=len(trades),
            measures=len(measures),
            scenarios=market_data.scenario_count,
            max_workers=self._max_workers,
        )
        rows: list[Optional[list[Result]]] = [None] * len(trades)
        try:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                with self._lock:
                    self._executor = executor
                futures: dict[Future, int] = {
                    executor.submit(
                        self._calculate_row,
                        trade_ids[row], trade, functions[row], requirements[row],
                        measures, market_data, reference_data, rules,
                    ): row
                    for row, trade in enumerate(trades)
                }
                pending = set(futures)
                while pending:
                    if self._closed.is_set():
                        raise CalculationCancelledError("calculation run was cancelled")
                    done, pending = wait(pending, timeout=_POLL_SECONDS, return_when=FIRST_COMPLETED)
                    for future in done:
                        rows[futures[future]] = future.result()
        except (CalculationCancelledError, CancelledError) as exc:
            self._transition(RunState.FAILED)
            logger.warning("calculation_cancelled")
            if isinstance(exc, CalculationCancelledError):
                raise
            raise CalculationCancelledError("calculation run was cancelled") from exc
        except Exception:
            self._transition(RunState.FAILED)
            logger.exception("calculation_failed")
            raise
        finally:
            with self._lock:
                self._executor = None

        results = Results(trade_ids, measures, rows)  # type: ignore[arg-type]
        self._transition(RunState.COMPLETED)
        return results

    def _calculate_row(
        self,
        trade_id: str,
        trade: Any,
        function: CalculationFunction,
        requirements: list[CalculationRequirements],
        measures: Sequence[Measure],
        market_data: ScenarioMarketData,
        reference_data: ReferenceData,
        rules: CalculationRules,
    ) -> list[Result]:
        log = logger.bind(trade_id=trade_id)
        try:
            product = function.expand(trade, reference_data)
        except (PricingError, ValueError) as exc:
            failure = Failure.of_exception(exc, context="trade expansion failed: ")
            log.warning("trade_expansion_failed", reason=failure.reason.value, message=failure.message)
            return [Result.of_failure(failure) for _ in measures]

        views = [market_data.scenario(i) for i in range(market_data.scenario_count)]
        cells = []
        for measure, measure_requirements in zip(measures, requirements):
            if self._closed.is_set():
                raise CalculationCancelledError("calculation run was cancelled")
            result = self._calculate_cell(
                function, measure, measure_requirements, product, views, market_data, rules
            )
            if result.failure is not None:
                log.warning(
                    "cell_failed",
                    measure=measure.value,
                    reason=result.failure.reason.value,
                    message=result.failure.message,
                )
            cells.append(result)
        return cells

    @staticmethod
    def _calculate_cell(
        function: CalculationFunction,
        measure: Measure,
        requirements: CalculationRequirements,
        product: Any,
        views: list[MarketDataView],
        market_data: ScenarioMarketData,
        rules: CalculationRules,
    ) -> Result:
        if measure not in function.supported_measures:
            return Result.failed(
                FailureReason.UNSUPPORTED,
                f"measure {measure.value} is not supported for product kind {function.product_kind.value}",
            )
        multi = len(views) > 1
        values = []
        for i, view in enumerate(views):
            context = f"scenario {i}: " if multi else ""
            try:
                value = function.calculate(measure, product, view)
            except MissingMarketDataError as exc:
                # Curves are only required once the pricer reads them (a settled trade reads none).
                missing = market_data.missing(requirements, i)
                if missing:
                    return Result.failed(FailureReason.MISSING_DATA, f"no {missing[0]} in scenario {i}")
                return Result.of_failure(Failure.of_exception(exc, context))
            except (PricingError, ArithmeticError, ValueError) as exc:
                return Result.of_failure(Failure.of_exception(exc, context))
            if rules.convert_currencies and rules.reporting_currency and isinstance(value, FxConvertible):
                try:
                    value = value.converted_to(rules.reporting_currency, view)
                except (PricingError, ArithmeticError, ValueError) as exc:
                    return Result.failed(
                        FailureReason.CURRENCY_CONVERSION,
                        f"{context}conversion to {rules.reporting_currency} failed: {exc}",
                    )
            values.append(value)
        return Result.success(ScenarioArray(values) if multi else values[0])
