"""
Missing-day filling for time series data.

Densifies a time series to one point per calendar day between its first
and last dates. Days with no data get a Y of 0.

When several points fall on the same day, the last one in input order wins.
"""
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from sqlGraph.diagnostics import DiagnosticKind, DiagnosticLog, ensure_log
from sqlGraph.models import DataPoint, SeriesKind
from sqlGraph.series import classify, parse_calendar_date

DATE_FORMAT = "%Y-%m-%d"


def _values_by_day(points: Sequence[DataPoint]) -> Dict[date, float]:
    values: Dict[date, float] = {}
    for point in points:
        # Later points overwrite earlier ones on the same day
        values[parse_calendar_date(point.x).date()] = point.y
    return values


def fill_missing_days(points: Sequence[DataPoint],
                      diagnostics: Optional[DiagnosticLog] = None) -> Tuple[DataPoint, ...]:
    """
    Fill gaps in a time series with zero-valued points.

    Args:
        points: Points in any order.
        diagnostics: Optional diagnostic log.

    Returns:
        One point per day, ascending by date. Empty or categorical input
        is returned unchanged.
    """
    diagnostics = ensure_log(diagnostics)

    if not points:
        return tuple(points)

    if classify(points) is not SeriesKind.TIME_SERIES:
        diagnostics.info(
            DiagnosticKind.GAP_FILL_SKIPPED,
            "Skipping missing day fill - data is not time series (contains non-date X values).",
            points=len(points),
        )
        return tuple(points)

    values = _values_by_day(points)
    min_day = min(values)
    max_day = max(values)

    filled = tuple(
        DataPoint(x=day.strftime(DATE_FORMAT), y=values.get(day.date(), 0.0))
        for day in pd.date_range(start=min_day, end=max_day, freq="D")
    )

    added = len(filled) - len(values)
    diagnostics.info(
        DiagnosticKind.GAP_FILL_APPLIED,
        f"Filled missing days from {min_day:%Y-%m-%d} to {max_day:%Y-%m-%d}: "
        f"added {added} days with 0 values (total: {len(filled)} points)",
        start=min_day.strftime(DATE_FORMAT),
        end=max_day.strftime(DATE_FORMAT),
        added=added,
        total=len(filled),
    )
    return filled
