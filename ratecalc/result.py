"""
Calculation results.

A `Result` is either a value or a `Failure`; a `Results` grid holds one
result per (trade, measure), fixed at construction. Cells of a multi-scenario
run hold a `ScenarioArray` of per-scenario values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

from ratecalc.errors import (
    AmbiguousMarketDataError,
    InvalidProductError,
    MissingMarketDataError,
    UnsupportedCalculationError,
)
from ratecalc.measures import Measure


class FailureReason(str, Enum):
    MISSING_DATA = "MISSING_DATA"
    UNSUPPORTED = "UNSUPPORTED"
    INVALID_INPUT = "INVALID_INPUT"
    CALCULATION_FAILED = "CALCULATION_FAILED"
    CURRENCY_CONVERSION = "CURRENCY_CONVERSION"


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    message: str

    @classmethod
    def of_exception(cls, exc: BaseException, context: str = "") -> "Failure":
        """Classify a cell-level exception; `context` is prefixed to the message."""
        if isinstance(exc, (MissingMarketDataError, AmbiguousMarketDataError)):
            reason = FailureReason.MISSING_DATA
        elif isinstance(exc, UnsupportedCalculationError):
            reason = FailureReason.UNSUPPORTED
        elif isinstance(exc, (InvalidProductError, ValueError)):
            reason = FailureReason.INVALID_INPUT
        else:
            reason = FailureReason.CALCULATION_FAILED
        text = str(exc) or type(exc).__name__
        if isinstance(exc, ArithmeticError):
            text = f"{type(exc).__name__}: {text}"
        return cls(reason, f"{context}{text}")


_NO_VALUE = object()


@dataclass(frozen=True)
class Result:
    """Success (holding a value) or failure (holding a `Failure`)."""

    _value: Any = _NO_VALUE
    failure: Failure | None = None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(_value=value)

    @classmethod
    def failed(cls, reason: FailureReason, message: str) -> "Result":
        return cls(failure=Failure(reason, message))

    @classmethod
    def of_failure(cls, failure: Failure) -> "Result":
        return cls(failure=failure)

    @property
    def is_success(self) -> bool:
        return self.failure is None

    @property
    def is_failure(self) -> bool:
        return self.failure is not None

    @property
    def value(self) -> Any:
        if self.failure is not None:
            raise ValueError(f"result is a failure: {self.failure.message}")
        return self._value

    def __repr__(self) -> str:
        if self.failure is not None:
            return f"Result.failed({self.failure.reason.value}, {self.failure.message!r})"
        return f"Result.success({self._value!r})"


class ScenarioArray:
    """Per-scenario values of one cell, in scenario order."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[Any]) -> None:
        self._values = tuple(values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __getitem__(self, i: int) -> Any:
        return self._values[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScenarioArray):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"ScenarioArray({list(self._values)})"

    @property
    def scenario_count(self) -> int:
        return len(self._values)


class Results:
    """Grid of results: rows are trades, columns are measures."""

    def __init__(
        self,
        trade_ids: Sequence[str],
        measures: Sequence[Measure],
        cells: Sequence[Sequence[Result]],
    ) -> None:
        if len(cells) != len(trade_ids) or any(len(row) != len(measures) for row in cells):
            raise ValueError(
                f"results grid must be {len(trade_ids)} x {len(measures)}"
            )
        self._trade_ids = tuple(trade_ids)
        self._measures = tuple(measures)
        self._cells = tuple(tuple(row) for row in cells)

    @property
    def row_count(self) -> int:
        return len(self._cells)

    @property
    def column_count(self) -> int:
        return len(self._measures)

    @property
    def trade_ids(self) -> tuple[str, ...]:
        return self._trade_ids

    @property
    def measures(self) -> tuple[Measure, ...]:
        return self._measures

    @property
    def cells(self) -> tuple[tuple[Result, ...], ...]:
        return self._cells

    def get(self, row: int, column: int) -> Result:
        return self._cells[row][column]

    def cell(self, row: int, measure: Measure) -> Result:
        return self._cells[row][self._measures.index(measure)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Results):
            return NotImplemented
        return (
            self._trade_ids == other._trade_ids
            and self._measures == other._measures
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Results({self.row_count} x {self.column_count})"
