"""Tests for the append-only fixing series."""

from datetime import date

import pytest

from ratecalc.timeseries import FixingSeries


def test_series_is_date_ordered() -> None:
    """Fixings are iterated in date order whatever the input order."""
    series = FixingSeries({date(2024, 3, 13): 0.053, date(2024, 1, 11): 0.0556})
    assert [d for d, _ in series] == [date(2024, 1, 11), date(2024, 3, 13)]
    assert series.latest_date == date(2024, 3, 13)
    assert len(series) == 2


def test_get_returns_none_when_absent() -> None:
    """Lookup is exact on the date."""
    series = FixingSeries.of(date(2024, 3, 13), 0.053)
    assert series.get(date(2024, 3, 13)) == 0.053
    assert series.get(date(2024, 3, 14)) is None
    assert date(2024, 3, 13) in series
    assert FixingSeries.empty().latest_date is None


def test_with_fixing_appends_without_mutating() -> None:
    """Appending returns a new series; the original is unchanged."""
    series = FixingSeries.of(date(2024, 3, 13), 0.053)
    extended = series.with_fixing(date(2024, 3, 14), 0.054)
    assert len(series) == 1
    assert extended.get(date(2024, 3, 14)) == 0.054
    assert extended != series


def test_with_fixing_rejects_history_rewrites() -> None:
    """A fixing on or before the latest date is refused."""
    series = FixingSeries.of(date(2024, 3, 13), 0.053)
    with pytest.raises(ValueError, match="must be after the latest fixing"):
        series.with_fixing(date(2024, 3, 13), 0.06)
    with pytest.raises(ValueError):
        series.with_fixing(date(2024, 3, 1), 0.06)


def test_equality_and_hash() -> None:
    """Series with the same fixings are equal and hash alike."""
    a = FixingSeries({date(2024, 1, 11): 0.05})
    b = FixingSeries({date(2024, 1, 11): 0.05})
    assert a == b
    assert hash(a) == hash(b)
