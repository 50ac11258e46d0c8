"""Tests for row coercion."""
from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from sqlGraph.coercion import coerce_row, coerce_x, coerce_y, has_required_columns
from sqlGraph.diagnostics import DiagnosticKind
from sqlGraph.errors import RowCoercionError
from sqlGraph.models import DataPoint


def test_required_columns_case_insensitive():
    assert has_required_columns(["x", "Y"])
    assert has_required_columns(["label", "X", "y"])
    assert not has_required_columns(["X", "value"])
    assert not has_required_columns([])


@pytest.mark.parametrize("value, expected", [
    (date(2025, 2, 1), "2025-02-01"),
    (datetime(2025, 2, 1, 17, 45), "2025-02-01"),
    (pd.Timestamp("2025-02-01 08:00"), "2025-02-01"),
    (None, ""),
    ("Germany", "Germany"),
    (42, "42"),
])
def test_coerce_x(value, expected):
    assert coerce_x(value) == expected


def test_coerce_y_numeric_types():
    assert coerce_y(3) == 3.0
    assert coerce_y(Decimal("2.50")) == 2.5
    assert coerce_y("7.25") == 7.25


def test_coerce_row_with_lowercase_columns():
    assert coerce_row({"x": "a", "y": 1}) == DataPoint(x="a", y=1.0)


def test_null_y_is_rejected():
    with pytest.raises(RowCoercionError) as exc:
        coerce_row({"X": "a", "Y": None})
    assert exc.value.kind is DiagnosticKind.NULL_NUMERIC


def test_date_y_suggests_swapped_columns():
    with pytest.raises(RowCoercionError) as exc:
        coerce_row({"X": 10, "Y": date(2025, 1, 1)})
    assert exc.value.kind is DiagnosticKind.TYPE_MISMATCH
    assert "swapped" in str(exc.value)


@pytest.mark.parametrize("value", ["n/a", b"\xff", object(), float("nan"), "inf"])
def test_non_numeric_y_is_rejected(value):
    with pytest.raises(RowCoercionError) as exc:
        coerce_row({"X": "a", "Y": value})
    assert exc.value.kind is DiagnosticKind.NON_NUMERIC


def test_unexpected_error_is_coercion_fault():
    class Exploding:
        def __str__(self):
            raise RuntimeError("boom")

    with pytest.raises(RowCoercionError) as exc:
        coerce_row({"X": Exploding(), "Y": 1})
    assert exc.value.kind is DiagnosticKind.COERCION_FAULT
    assert "boom" in str(exc.value)
