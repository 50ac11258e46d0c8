"""
Linear trend fitting for chart coordinates.
Ordinary least squares over the numeric X/Y arrays that get plotted.
"""
import math
from typing import Optional, Sequence

import numpy as np

from sqlGraph.diagnostics import DiagnosticKind, DiagnosticLog, ensure_log
from sqlGraph.models import TrendLine


def fit_trend(x_values: Sequence[float], y_values: Sequence[float],
              diagnostics: Optional[DiagnosticLog] = None) -> Optional[TrendLine]:
    """
    Fit a least-squares line through the points.

    Args:
        x_values: Numeric X coordinates.
        y_values: Numeric Y coordinates, same length as x_values.
        diagnostics: Optional log receiving a degenerate trend event.

    Returns:
        TrendLine, or None when fewer than two points exist or all X
        values are identical.

    Raises:
        ValueError: If the arrays differ in length.
    """
    if len(x_values) != len(y_values):
        raise ValueError(f"x and y lengths differ: {len(x_values)} != {len(y_values)}")

    n = len(x_values)
    if n < 2:
        return None

    x = np.asarray(x_values, dtype=float)
    y = np.asarray(y_values, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0 or x.min() == x.max():
        ensure_log(diagnostics).info(
            DiagnosticKind.DEGENERATE_TREND,
            "All X values are identical; no trend line drawn.",
            points=n,
        )
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    if not (math.isfinite(slope) and math.isfinite(intercept)):
        ensure_log(diagnostics).info(
            DiagnosticKind.DEGENERATE_TREND,
            "Trend fit produced a non-finite result; no trend line drawn.",
            points=n,
        )
        return None

    return TrendLine(
        slope=float(slope),
        intercept=float(intercept),
        domain_min=float(x.min()),
        domain_max=float(x.max()),
    )
