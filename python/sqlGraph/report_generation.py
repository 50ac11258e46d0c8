"""
Report generation for SQL-to-Graph.
Renders one line chart per query result and lays them out in a PDF,
one A4 page per chart.
"""
import io
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for PDF generation
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from common.io_utils import ensure_directory
from sqlGraph.chart_data import prepare_chart_data
from sqlGraph.diagnostics import DiagnosticKind, DiagnosticLog, ensure_log
from sqlGraph.errors import RenderFault
from sqlGraph.models import ChartData, DataPoint, QueryResult, ReportEntry, SeriesKind, TrendLine
from sqlGraph.series import classify_series
from sqlGraph.trend import fit_trend


# Chart configuration constants
CHART_WIDTH = 1200     # logical pixels
CHART_HEIGHT = 800
SCALE_FACTOR = 2.0     # device pixels per logical pixel
BASE_DPI = 100

LINE_HEX = "#1f3fd1"
TREND_HEX = "#d62728"

# Page configuration constants
PAGE_SIZE = A4
PAGE_MARGIN = 1.5 * cm
CHART_PADDING = 10
SUMMARY_LIMIT = 10
REPORT_FILENAME = "SqlToGraph-{date}.pdf"

ChartRenderer = Callable[[ChartData, Optional[TrendLine]], bytes]


def _draw_empty(ax) -> None:
    ax.text(0.5, 0.5, "No data available", ha='center', va='center',
            fontsize=16, transform=ax.transAxes)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.grid(False)


def _draw_series(ax, data: ChartData, trend: Optional[TrendLine]) -> None:
    ax.plot(data.x_values, data.y_values, color=LINE_HEX, linewidth=3,
            marker='o', markersize=8)

    if trend is not None:
        (x0, y0), (x1, y1) = trend.endpoints()
        ax.plot([x0, x1], [y0, y1], color=TREND_HEX, alpha=0.8, linewidth=3,
                linestyle='--')

    ax.set_ylabel("Count", fontsize=14)
    ax.set_xlabel("X Values", fontsize=14)

    if data.kind is SeriesKind.TIME_SERIES:
        locator = mdates.AutoDateLocator()
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
    else:
        ax.set_xticks(data.tick_positions)
        ax.set_xticklabels(data.tick_labels, rotation=45, ha='right')

    ax.tick_params(labelsize=12)
    ax.grid(True, color='gray', alpha=0.3)


def render_chart(data: ChartData, trend: Optional[TrendLine] = None) -> bytes:
    """
    Render a line chart as PNG bytes.

    Args:
        data: Plot-ready coordinates.
        trend: Optional trend line drawn dashed over the data.

    Returns:
        PNG image of CHART_WIDTH x CHART_HEIGHT logical pixels at SCALE_FACTOR.

    Raises:
        RenderFault: If matplotlib fails to draw or encode the chart.
    """
    fig = None
    try:
        fig, ax = plt.subplots(
            figsize=(CHART_WIDTH / BASE_DPI, CHART_HEIGHT / BASE_DPI),
            dpi=BASE_DPI * SCALE_FACTOR,
        )
        fig.patch.set_facecolor('white')
        ax.set_facecolor('white')

        if data.is_empty:
            _draw_empty(ax)
        else:
            _draw_series(ax, data, trend)

        fig.tight_layout()
        buf = io.BytesIO()
        fig.savefig(buf, format='png', facecolor='white')
        return buf.getvalue()
    except Exception as e:
        raise RenderFault(f"{type(e).__name__}: {e}", context={"points": len(data.x_values)}) from e
    finally:
        if fig is not None:
            plt.close(fig)


def build_report_entries(results: Sequence[QueryResult],
                         diagnostics: Optional[DiagnosticLog] = None,
                         renderer: ChartRenderer = render_chart) -> List[ReportEntry]:
    """
    Turn query results into report pages.

    Each result is classified and put in display order, mapped to chart
    coordinates, given a trend line and rendered. A render failure keeps
    the page and records the error so the PDF falls back to a text summary.

    Args:
        results: Query results in script order.
        diagnostics: Optional diagnostic log.
        renderer: Chart renderer, replaceable for tests.

    Returns:
        One ReportEntry per result.
    """
    diagnostics = ensure_log(diagnostics)
    entries: List[ReportEntry] = []

    for result in results:
        series = classify_series(result.points)
        if not series.points:
            entries.append(ReportEntry(title=result.title, points=()))
            continue

        chart = prepare_chart_data(series)
        trend = fit_trend(chart.x_values, chart.y_values, diagnostics)

        try:
            image = renderer(chart, trend)
        except RenderFault as e:
            diagnostics.warning(
                DiagnosticKind.RENDER_FAULT,
                f"Chart generation failed for '{result.title}': {e}",
                title=result.title,
            )
            entries.append(ReportEntry(title=result.title, points=series.points, error=str(e)))
            continue

        entries.append(ReportEntry(title=result.title, points=series.points, image=image))

    return entries


def summary_lines(points: Sequence[DataPoint], limit: int = SUMMARY_LIMIT) -> List[str]:
    """
    Text fallback for a chart that could not be drawn.

    Returns:
        'label: value' lines for the first `limit` points, plus an
        overflow line when more points exist.
    """
    lines = [f"{p.x}: {p.y:.2f}" for p in points[:limit]]
    if len(points) > limit:
        lines.append(f"... and {len(points) - limit} more points")
    return lines


def _draw_title(c: canvas.Canvas, title: str, y: float) -> float:
    W, _ = PAGE_SIZE
    c.setFont("Helvetica-Bold", 18)
    c.setFillColor(colors.black)
    c.drawCentredString(W / 2, y - 18, title)
    return y - 18 - 10


def _draw_chart_image(c: canvas.Canvas, image: bytes, y: float) -> None:
    W, _ = PAGE_SIZE
    box_w = W - 2 * PAGE_MARGIN
    img = ImageReader(io.BytesIO(image))
    iw, ih = img.getSize()
    target_w = box_w - 2 * CHART_PADDING
    target_h = ih * (target_w / iw)
    box_h = target_h + 2 * CHART_PADDING

    c.setStrokeColor(colors.black)
    c.setLineWidth(1)
    c.rect(PAGE_MARGIN, y - box_h, box_w, box_h, stroke=1, fill=0)
    c.drawImage(img, PAGE_MARGIN + CHART_PADDING, y - box_h + CHART_PADDING,
                width=target_w, height=target_h, mask='auto')


def _draw_text_summary(c: canvas.Canvas, entry: ReportEntry, y: float) -> None:
    W, _ = PAGE_SIZE
    top = y
    x = PAGE_MARGIN + CHART_PADDING
    y -= CHART_PADDING + 10

    c.setFont("Helvetica", 10)
    c.setFillColor(colors.HexColor("#FF0000"))
    c.drawString(x, y, f"Chart generation failed: {entry.error or 'no image available'}")
    y -= 20

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 12)
    c.drawString(x, y, "Data Summary:")
    y -= 16

    lines = summary_lines(entry.points)
    for i, line in enumerate(lines):
        is_overflow = i == SUMMARY_LIMIT
        c.setFont("Helvetica-Oblique" if is_overflow else "Courier", 9)
        c.drawString(x, y, line)
        y -= 12

    c.setStrokeColor(colors.black)
    c.rect(PAGE_MARGIN, y, W - 2 * PAGE_MARGIN, top - y, stroke=1, fill=0)


def draw_page(c: canvas.Canvas, entry: ReportEntry) -> None:
    """Draw a single report page for one entry."""
    W, H = PAGE_SIZE
    y = _draw_title(c, entry.title, H - PAGE_MARGIN)

    if not entry.points:
        c.setFont("Helvetica-Oblique", 12)
        c.drawCentredString(W / 2, y - 12, "No data to display for this chart.")
    elif entry.image is not None:
        _draw_chart_image(c, entry.image, y)
    else:
        _draw_text_summary(c, entry, y)

    c.showPage()


def generate_pdf_report(entries: Sequence[ReportEntry], output_dir: Union[str, Path] = ".",
                        report_date: Optional[date] = None,
                        diagnostics: Optional[DiagnosticLog] = None) -> Path:
    """
    Write the PDF report.

    Args:
        entries: Report pages in order.
        output_dir: Directory for the report file.
        report_date: Date used in the file name (defaults to today).
        diagnostics: Optional diagnostic log.

    Returns:
        Path to the generated PDF file.
    """
    report_date = report_date or date.today()
    out_dir = ensure_directory(output_dir)
    pdf_out = out_dir / REPORT_FILENAME.format(date=report_date.strftime("%Y-%m-%d"))

    c = canvas.Canvas(str(pdf_out), pagesize=PAGE_SIZE)
    c.setTitle("SQL to Graph Report")
    for entry in entries:
        draw_page(c, entry)
    c.save()

    ensure_log(diagnostics).info(
        DiagnosticKind.REPORT_WRITTEN,
        f"PDF saved to: {pdf_out}",
        path=str(pdf_out),
        pages=len(entries),
    )
    return pdf_out
