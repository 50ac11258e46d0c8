"""
SQL-to-Graph
Turns annotated SQL scripts into chart-ready datasets and a PDF of charts.

Queries return two columns, X (a date or a category label) and Y (a number).
Results are classified as time series or categorical data, optionally
gap-filled, fitted with a trend line and rendered one chart per page.
"""

__version__ = "0.1.0"

from .models import (
    ChartData,
    ClassifiedSeries,
    DataPoint,
    QueryDirective,
    QueryResult,
    SeriesKind,
    TrendLine,
)
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog, Severity
from .query_parser import parse_queries, parse_queries_from_file
from .coercion import coerce_row
from .series import classify, classify_series, is_calendar_date, sort_points
from .gap_filling import fill_missing_days
from .trend import fit_trend
from .chart_data import prepare_chart_data

__all__ = [
    'ChartData',
    'ClassifiedSeries',
    'DataPoint',
    'Diagnostic',
    'DiagnosticKind',
    'DiagnosticLog',
    'QueryDirective',
    'QueryResult',
    'SeriesKind',
    'Severity',
    'TrendLine',
    'classify',
    'classify_series',
    'coerce_row',
    'fill_missing_days',
    'fit_trend',
    'is_calendar_date',
    'parse_queries',
    'parse_queries_from_file',
    'prepare_chart_data',
    'sort_points',
]
