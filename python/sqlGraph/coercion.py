"""
Row coercion for SQL-to-Graph.

Turns one raw database row into a DataPoint. Queries must return columns
named X and Y (any case). X becomes a label: dates are formatted as ISO
dates, NULL becomes an empty string and anything else is stringified.
Y must be numeric; rows whose Y is NULL, a date, or not convertible are
rejected with a RowCoercionError naming the reason.
"""
import math
from datetime import date
from typing import Any, Iterable, Mapping

from sqlGraph.diagnostics import DiagnosticKind
from sqlGraph.errors import RowCoercionError
from sqlGraph.models import DataPoint

X_COLUMN = "X"
Y_COLUMN = "Y"
DATE_FORMAT = "%Y-%m-%d"

_MISSING = object()


def find_column(column_names: Iterable[str], wanted: str):
    """
    Find a column name matching `wanted` case-insensitively.

    Returns:
        The actual column name, or None if absent.
    """
    wanted = wanted.lower()
    for name in column_names:
        if str(name).lower() == wanted:
            return name
    return None


def has_required_columns(column_names: Iterable[str]) -> bool:
    """Check that both X and Y columns are present (case-insensitive)."""
    names = list(column_names)
    return find_column(names, X_COLUMN) is not None and find_column(names, Y_COLUMN) is not None


def _get_field(row: Mapping[str, Any], wanted: str) -> Any:
    column = find_column(row.keys(), wanted)
    if column is None:
        return _MISSING
    return row[column]


def coerce_x(value: Any) -> str:
    """
    Convert a raw X value to its label.

    Args:
        value: Raw database value.

    Returns:
        'YYYY-MM-DD' for dates and datetimes, '' for NULL, str(value) otherwise.
    """
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    return str(value)


def coerce_y(value: Any) -> float:
    """
    Convert a raw Y value to a finite float.

    Raises:
        RowCoercionError: NULL_NUMERIC, TYPE_MISMATCH or NON_NUMERIC.
    """
    if value is None or value is _MISSING:
        raise RowCoercionError(DiagnosticKind.NULL_NUMERIC, "Y column contains NULL value")

    if isinstance(value, date):
        raise RowCoercionError(
            DiagnosticKind.TYPE_MISMATCH,
            f"Y column contains a date/time value ({value}) instead of a number. "
            "Check that the SELECT returns X and Y in the right order "
            "(Y should be numeric, X should be text or a date); the columns may be swapped.",
            context={"value": value},
        )

    try:
        y = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise RowCoercionError(
            DiagnosticKind.NON_NUMERIC,
            f"Cannot convert Y value '{value}' to numeric",
            context={"value": value, "error": str(e)},
        ) from e

    if not math.isfinite(y):
        raise RowCoercionError(
            DiagnosticKind.NON_NUMERIC,
            f"Y value '{value}' is not a finite number",
            context={"value": value},
        )
    return y


def coerce_row(row: Mapping[str, Any]) -> DataPoint:
    """
    Convert one result row into a DataPoint.

    Args:
        row: Mapping of column name to raw value (e.g. SQLAlchemy RowMapping).

    Returns:
        DataPoint built from the row's X and Y fields.

    Raises:
        RowCoercionError: When the row must be skipped. Unexpected errors
            are reported as COERCION_FAULT.
    """
    try:
        x = coerce_x(_get_field(row, X_COLUMN))
        y = coerce_y(_get_field(row, Y_COLUMN))
    except RowCoercionError:
        raise
    except Exception as e:
        raise RowCoercionError(
            DiagnosticKind.COERCION_FAULT,
            f"Error reading row: {type(e).__name__}: {e}",
            context={"error_type": type(e).__name__},
        ) from e
    return DataPoint(x=x, y=y)
