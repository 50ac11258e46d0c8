"""Tests for chart coordinate preparation."""
import pytest

from conftest import points
from sqlGraph.chart_data import MAX_CATEGORY_TICKS, prepare_chart_data
from sqlGraph.models import ClassifiedSeries, SeriesKind
from sqlGraph.series import classify_series


def test_time_series_x_preserves_day_spacing():
    series = classify_series(points(("2025-01-01", 5), ("2025-01-03", 9), ("2025-01-10", 1)))
    chart = prepare_chart_data(series)

    assert chart.kind is SeriesKind.TIME_SERIES
    # display order is newest first
    assert chart.labels == ("2025-01-10", "2025-01-03", "2025-01-01")
    assert chart.y_values == (1.0, 9.0, 5.0)
    assert chart.x_values[0] - chart.x_values[1] == pytest.approx(7.0)
    assert chart.x_values[1] - chart.x_values[2] == pytest.approx(2.0)
    assert chart.tick_positions == ()


def test_categorical_x_is_index():
    series = classify_series(points(("b", 2), ("a", 1), ("c", 3)))
    chart = prepare_chart_data(series)

    assert chart.kind is SeriesKind.CATEGORICAL
    assert chart.x_values == (0.0, 1.0, 2.0)
    assert chart.y_values == (1.0, 2.0, 3.0)
    assert chart.labels == ("a", "b", "c")
    assert chart.tick_labels == ("a", "b", "c")


def test_categorical_ticks_limited():
    data = points(*[(f"cat{i:02d}", i) for i in range(15)])
    chart = prepare_chart_data(classify_series(data))

    assert len(chart.labels) == 15
    assert len(chart.tick_labels) == MAX_CATEGORY_TICKS
    assert chart.tick_labels[0] == "cat00"
    assert chart.tick_positions == tuple(float(i) for i in range(MAX_CATEGORY_TICKS))


def test_empty_series():
    chart = prepare_chart_data(ClassifiedSeries(kind=SeriesKind.CATEGORICAL, points=()))
    assert chart.is_empty
    assert chart.x_values == ()
    assert chart.y_values == ()
    assert chart.labels == ()
