"""
Series classification for SQL-to-Graph.

A point collection is a time series when every X label is a calendar date,
otherwise it is categorical. Time series display most recent first;
categorical series display in ascending label order.

parse_calendar_date is the only place that decides what counts as a date.
Gap filling and chart coordinate mapping both go through it.
"""
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from sqlGraph.models import ClassifiedSeries, DataPoint, SeriesKind

# Accepted label formats, tried in order. No locale-dependent formats.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y/%m/%d",
)


def parse_calendar_date(label: str) -> Optional[datetime]:
    """
    Parse an X label as a date.

    Args:
        label: X label as produced by coercion.

    Returns:
        Parsed datetime, or None if the label is not a date.
    """
    if not label:
        return None
    text = label.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def is_calendar_date(label: str) -> bool:
    return parse_calendar_date(label) is not None


def classify(points: Iterable[DataPoint]) -> SeriesKind:
    """
    Decide whether points form a time series.

    An empty collection is categorical.
    """
    points = list(points)
    if points and all(is_calendar_date(p.x) for p in points):
        return SeriesKind.TIME_SERIES
    return SeriesKind.CATEGORICAL


def sort_points(points: Sequence[DataPoint],
                kind: Optional[SeriesKind] = None) -> Tuple[DataPoint, ...]:
    """
    Sort points into the canonical display order for their kind.

    Args:
        points: Points to sort.
        kind: Known kind; classified from the points when omitted.

    Returns:
        Points newest first for time series, by label for categorical data.
    """
    if kind is None:
        kind = classify(points)

    if kind is SeriesKind.TIME_SERIES:
        return tuple(sorted(points, key=lambda p: parse_calendar_date(p.x), reverse=True))
    return tuple(sorted(points, key=lambda p: p.x))


def classify_series(points: Sequence[DataPoint]) -> ClassifiedSeries:
    """Classify points and put them in display order."""
    kind = classify(points)
    return ClassifiedSeries(kind=kind, points=sort_points(points, kind))
