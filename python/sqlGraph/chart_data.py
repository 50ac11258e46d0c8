"""
Chart coordinate preparation.

Time series X values become matplotlib date numbers (days since the
matplotlib epoch), so uneven gaps between dates plot to scale.
Categorical X values become their position in the sorted series.
"""
import matplotlib.dates as mdates

from sqlGraph.models import ChartData, ClassifiedSeries, SeriesKind
from sqlGraph.series import parse_calendar_date

MAX_CATEGORY_TICKS = 10  # keep category axis labels legible


def prepare_chart_data(series: ClassifiedSeries) -> ChartData:
    """
    Map a classified series to numeric plot coordinates.

    Args:
        series: Classified, sorted points.

    Returns:
        ChartData with one x/y/label per point. Categorical series also
        carry tick positions and labels for the first few categories.
    """
    points = series.points

    if series.kind is SeriesKind.TIME_SERIES:
        x_values = tuple(float(mdates.date2num(parse_calendar_date(p.x))) for p in points)
    else:
        x_values = tuple(float(i) for i in range(len(points)))

    y_values = tuple(p.y for p in points)
    labels = tuple(p.x for p in points)

    if series.kind is SeriesKind.CATEGORICAL:
        tick_positions = x_values[:MAX_CATEGORY_TICKS]
        tick_labels = labels[:MAX_CATEGORY_TICKS]
    else:
        tick_positions = ()
        tick_labels = ()

    return ChartData(
        kind=series.kind,
        x_values=x_values,
        y_values=y_values,
        labels=labels,
        tick_positions=tick_positions,
        tick_labels=tick_labels,
    )
