"""PDF export of activity history.

Layout runs in two steps: ``paginate`` places every table row on a page
without touching a canvas, and ``render_pdf`` draws the result with
ReportLab. Vertical positions are measured from the top edge in millimetres.
"""

import io
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from greenlens.domain.activities import Activity
from greenlens.domain.history import Stats
from greenlens.services.export_rows import (
    activity_row,
    format_locale_date,
    format_number,
)

TABLE_HEADERS = ["Date", "Category", "Type", "Value", "Unit", "CO2e (kg)"]
ELLIPSIS = "..."


@dataclass(frozen=True)
class ReportTheme:
    """Colors used when drawing a report."""

    name: str
    title: colors.Color
    text: colors.Color
    header_fill: colors.Color
    header_text: colors.Color
    stripe_fill: colors.Color
    page_fill: colors.Color | None = None


LIGHT_THEME = ReportTheme(
    name="light",
    title=colors.HexColor("#1DD1A1"),
    text=colors.HexColor("#323232"),
    header_fill=colors.HexColor("#1DD1A1"),
    header_text=colors.white,
    stripe_fill=colors.HexColor("#F0F0F0"),
)

DARK_THEME = ReportTheme(
    name="dark",
    title=colors.HexColor("#1DD1A1"),
    text=colors.HexColor("#E6E6E6"),
    header_fill=colors.HexColor("#0E8F6E"),
    header_text=colors.white,
    stripe_fill=colors.HexColor("#2A2A2A"),
    page_fill=colors.HexColor("#1E1E1E"),
)

THEMES = {theme.name: theme for theme in (LIGHT_THEME, DARK_THEME)}


@dataclass(frozen=True)
class PdfLayout:
    """Page geometry for the history report, in millimetres (A4 portrait)."""

    page_width: float = 210.0
    page_height: float = 297.0
    left: float = 15.0
    title_y: float = 20.0
    generated_y: float = 30.0
    stats_y: tuple[float, ...] = (45.0, 52.0, 59.0, 66.0)
    table_x: float = 10.0
    table_top: float = 80.0
    column_widths: tuple[float, ...] = (25.0, 20.0, 25.0, 15.0, 15.0, 20.0)
    row_height: float = 8.0
    header_gap: float = 2.0
    baseline_offset: float = 6.0
    cell_padding: float = 2.0
    top_margin: float = 15.0
    bottom_margin: float = 20.0
    title_font_size: float = 20.0
    generated_font_size: float = 10.0
    stats_font_size: float = 11.0
    table_font_size: float = 10.0

    def __post_init__(self) -> None:
        if len(self.column_widths) != len(TABLE_HEADERS):
            raise ValueError("Expected one column width per table header")
        if sum(self.column_widths) > self.page_width - 2 * self.table_x:
            raise ValueError("Column widths exceed the usable page width")
        if self.row_height <= 0:
            raise ValueError("Row height must be positive")

    @property
    def break_line(self) -> float:
        """Lowest cursor position a row may start at."""
        return self.page_height - self.bottom_margin

    @property
    def first_row_y(self) -> float:
        """Cursor position of the first data row on page one."""
        return self.table_top + self.row_height + self.header_gap

    def column_offsets(self) -> list[float]:
        """Return the left edge of every column."""
        offsets = []
        x = self.table_x
        for width in self.column_widths:
            offsets.append(x)
            x += width
        return offsets


@dataclass(frozen=True)
class PlacedRow:
    """A data row positioned on a page."""

    index: int
    y: float
    striped: bool
    cells: list[str]


@dataclass
class PdfPage:
    """Rows placed on one page; only the first page carries the header."""

    number: int
    has_header: bool
    rows: list[PlacedRow] = field(default_factory=list)


def paginate(
    activities: Sequence[Activity], layout: PdfLayout | None = None
) -> list[PdfPage]:
    """Place table rows on pages in input order.

    A row that would start below the break line moves to a new page. Stripes
    follow the global row index, so they do not restart on a new page.
    """
    layout = layout or PdfLayout()
    pages = [PdfPage(number=1, has_header=True)]
    y = layout.first_row_y
    for index, activity in enumerate(activities):
        if y > layout.break_line:
            pages.append(PdfPage(number=len(pages) + 1, has_header=False))
            y = layout.top_margin
        row = activity_row(activity)
        cells = [
            fit_text(cell, "Helvetica", layout.table_font_size, _cell_width(layout, i))
            for i, cell in enumerate(row.table_cells())
        ]
        pages[-1].rows.append(
            PlacedRow(index=index, y=y, striped=index % 2 == 0, cells=cells)
        )
        y += layout.row_height
    return pages


def fit_text(text: str, font_name: str, font_size: float, max_width: float) -> str:
    """Truncate ``text`` with an ellipsis so it fits ``max_width`` points."""
    if stringWidth(text, font_name, font_size) <= max_width:
        return text
    if stringWidth(ELLIPSIS, font_name, font_size) > max_width:
        return ""
    lo, hi = 0, len(text)
    best = ELLIPSIS
    while lo <= hi:
        mid = (lo + hi) // 2
        candidate = text[:mid].rstrip() + ELLIPSIS
        if stringWidth(candidate, font_name, font_size) <= max_width:
            best = candidate
            lo = mid + 1
        else:
            hi = mid - 1
    return best


def render_pdf(
    activities: Sequence[Activity],
    stats: Stats,
    theme: ReportTheme = LIGHT_THEME,
    layout: PdfLayout | None = None,
    generated_on: date | None = None,
) -> bytes:
    """Render the history report and return the PDF bytes."""
    layout = layout or PdfLayout()
    pages = paginate(activities, layout)
    buffer = io.BytesIO()
    pdf = canvas.Canvas(
        buffer, pagesize=(layout.page_width * mm, layout.page_height * mm)
    )
    pdf.setTitle("GreenLens - Carbon History")

    for page in pages:
        if page.number > 1:
            pdf.showPage()
        _draw_background(pdf, layout, theme)
        if page.has_header:
            _draw_summary(pdf, layout, theme, stats, generated_on or date.today())
            _draw_table_header(pdf, layout, theme)
        pdf.setFont("Helvetica", layout.table_font_size)
        for row in page.rows:
            _draw_row(pdf, layout, theme, row)

    pdf.save()
    return buffer.getvalue()


def _cell_width(layout: PdfLayout, column: int) -> float:
    return (layout.column_widths[column] - 2 * layout.cell_padding) * mm


def _to_canvas_y(layout: PdfLayout, y: float) -> float:
    return (layout.page_height - y) * mm


def _draw_background(
    pdf: canvas.Canvas, layout: PdfLayout, theme: ReportTheme
) -> None:
    if theme.page_fill is None:
        return
    pdf.setFillColor(theme.page_fill)
    pdf.rect(
        0, 0, layout.page_width * mm, layout.page_height * mm, fill=1, stroke=0
    )


def _draw_summary(
    pdf: canvas.Canvas,
    layout: PdfLayout,
    theme: ReportTheme,
    stats: Stats,
    generated_on: date,
) -> None:
    x = layout.left * mm
    pdf.setFont("Helvetica", layout.title_font_size)
    pdf.setFillColor(theme.title)
    pdf.drawString(
        x, _to_canvas_y(layout, layout.title_y), "GreenLens - Carbon History"
    )

    pdf.setFont("Helvetica", layout.generated_font_size)
    pdf.setFillColor(theme.text)
    pdf.drawString(
        x,
        _to_canvas_y(layout, layout.generated_y),
        f"Generated: {format_locale_date(generated_on)}",
    )

    lines = [
        f"Total CO2e: {format_number(stats.total_co2)} kg",
        f"Daily Average: {format_number(stats.daily_average)} kg/day",
        f"Highest Day: {format_number(stats.highest_day)} kg",
        f"Total Entries: {stats.total_entries}",
    ]
    pdf.setFont("Helvetica-Bold", layout.stats_font_size)
    for y, line in zip(layout.stats_y, lines, strict=True):
        pdf.drawString(x, _to_canvas_y(layout, y), line)


def _draw_table_header(
    pdf: canvas.Canvas, layout: PdfLayout, theme: ReportTheme
) -> None:
    pdf.setFont("Helvetica-Bold", layout.table_font_size)
    for x, width, header in zip(
        layout.column_offsets(), layout.column_widths, TABLE_HEADERS, strict=True
    ):
        _fill_cell(pdf, layout, theme.header_fill, x, width, layout.table_top)
        pdf.setFillColor(theme.header_text)
        pdf.drawString(
            (x + layout.cell_padding) * mm,
            _to_canvas_y(layout, layout.table_top),
            header,
        )


def _draw_row(
    pdf: canvas.Canvas, layout: PdfLayout, theme: ReportTheme, row: PlacedRow
) -> None:
    for x, width, cell in zip(
        layout.column_offsets(), layout.column_widths, row.cells, strict=True
    ):
        if row.striped:
            _fill_cell(pdf, layout, theme.stripe_fill, x, width, row.y)
        pdf.setFillColor(theme.text)
        pdf.drawString(
            (x + layout.cell_padding) * mm, _to_canvas_y(layout, row.y), cell
        )


def _fill_cell(
    pdf: canvas.Canvas,
    layout: PdfLayout,
    color: colors.Color,
    x: float,
    width: float,
    baseline_y: float,
) -> None:
    top = baseline_y - layout.baseline_offset
    pdf.setFillColor(color)
    pdf.rect(
        x * mm,
        _to_canvas_y(layout, top + layout.row_height),
        width * mm,
        layout.row_height * mm,
        fill=1,
        stroke=0,
    )
