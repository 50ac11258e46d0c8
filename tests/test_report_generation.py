"""Tests for chart rendering and the PDF report."""
import struct
from datetime import date

import pytest

from conftest import points
from sqlGraph.chart_data import prepare_chart_data
from sqlGraph.diagnostics import DiagnosticKind
from sqlGraph.errors import RenderFault
from sqlGraph.models import ChartData, QueryResult, ReportEntry, SeriesKind
from sqlGraph.report_generation import (
    CHART_HEIGHT,
    CHART_WIDTH,
    SCALE_FACTOR,
    build_report_entries,
    generate_pdf_report,
    render_chart,
    summary_lines,
)
from sqlGraph.series import classify_series
from sqlGraph.trend import fit_trend

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def png_size(data: bytes):
    # IHDR chunk follows the signature: width and height are big-endian uint32
    return struct.unpack(">II", data[16:24])


def test_render_time_series_chart_with_trend():
    chart = prepare_chart_data(classify_series(points(("2025-01-01", 1), ("2025-01-02", 3), ("2025-01-05", 2))))
    trend = fit_trend(chart.x_values, chart.y_values)
    image = render_chart(chart, trend)

    assert image.startswith(PNG_SIGNATURE)
    assert png_size(image) == (int(CHART_WIDTH * SCALE_FACTOR), int(CHART_HEIGHT * SCALE_FACTOR))


def test_render_categorical_chart_without_trend():
    chart = prepare_chart_data(classify_series(points(("a", 1))))
    assert render_chart(chart, None).startswith(PNG_SIGNATURE)


def test_render_empty_chart():
    empty = ChartData(kind=SeriesKind.CATEGORICAL, x_values=(), y_values=(), labels=())
    assert render_chart(empty).startswith(PNG_SIGNATURE)


def test_entries_are_sorted_for_display():
    results = [QueryResult("Daily", points(("2025-01-01", 1), ("2025-01-03", 3)))]
    rendered = []

    def renderer(chart, trend):
        rendered.append((chart, trend))
        return b"png"

    entries = build_report_entries(results, renderer=renderer)
    assert entries[0].image == b"png"
    assert [p.x for p in entries[0].points] == ["2025-01-03", "2025-01-01"]
    assert rendered[0][1] is not None


def test_render_failure_falls_back_to_summary(diagnostics):
    def failing_renderer(chart, trend):
        raise RenderFault("no fonts")

    results = [
        QueryResult("Broken", points(("b", 2), ("a", 1))),
        QueryResult("Also", points(("c", 3))),
    ]
    entries = build_report_entries(results, diagnostics, renderer=failing_renderer)

    assert [e.title for e in entries] == ["Broken", "Also"]
    assert entries[0].image is None
    assert entries[0].error == "no fonts"
    assert [p.x for p in entries[0].points] == ["a", "b"]
    assert diagnostics.count(DiagnosticKind.RENDER_FAULT) == 2


def test_degenerate_trend_still_renders(diagnostics):
    results = [QueryResult("Same day", points(("2025-01-01", 1), ("2025-01-01", 9)))]
    entries = build_report_entries(results, diagnostics, renderer=lambda chart, trend: b"png")
    assert entries[0].image == b"png"
    assert diagnostics.count(DiagnosticKind.DEGENERATE_TREND) == 1


def test_summary_lines_with_overflow():
    data = points(*[(f"k{i:02d}", i) for i in range(13)])
    lines = summary_lines(data)
    assert len(lines) == 11
    assert lines[0] == "k00: 0.00"
    assert lines[-1] == "... and 3 more points"


def test_summary_lines_short():
    assert summary_lines(points(("a", 2.5))) == ["a: 2.50"]


def test_generate_pdf_report(tmp_path, diagnostics):
    chart = prepare_chart_data(classify_series(points(("x", 1), ("y", 2))))
    entries = [
        ReportEntry("Chart", points(("x", 1), ("y", 2)), image=render_chart(chart, None)),
        ReportEntry("Fallback", points(*[(f"k{i}", i) for i in range(12)]), error="boom"),
        ReportEntry("Empty", ()),
    ]
    pdf_path = generate_pdf_report(entries, tmp_path / "out", date(2025, 3, 1), diagnostics)

    assert pdf_path.name == "SqlToGraph-2025-03-01.pdf"
    content = pdf_path.read_bytes()
    assert content.startswith(b"%PDF")
    assert b"%%EOF" in content
    assert diagnostics.count(DiagnosticKind.REPORT_WRITTEN) == 1


def test_matplotlib_failure_becomes_render_fault():
    broken = ChartData(kind=SeriesKind.CATEGORICAL, x_values=(0.0, 1.0), y_values=(1.0,), labels=("a", "b"))
    with pytest.raises(RenderFault, match="ValueError"):
        render_chart(broken)
