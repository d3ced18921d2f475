"""
Exports of a dataset profile.

Produces the downloadable artifacts of the dashboard:
- Summary statistics as CSV
- Correlation matrix as CSV
- A PDF analysis report (overview, statistics table, correlation matrix)
"""
from datetime import date
from io import BytesIO
from typing import List, Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.enums import TA_CENTER
from reportlab.pdfgen import canvas
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from eda_backend import config
from eda_backend.models import ColumnType, ProfileResult

STATS_HEADERS = [
    "Column", "Type", "Count", "Null Count", "Unique Count",
    "Mean", "Median", "Std Dev", "Min", "Max", "Mode",
]

MISSING = "N/A"


class NotEnoughNumericColumnsError(ValueError):
    """Raised when a correlation export is requested for fewer than two numeric columns."""


def _fmt(value: Optional[float], decimals: int = config.EXPORT_DECIMALS) -> str:
    return MISSING if value is None else f"{value:.{decimals}f}"


def _shorten(text: str, limit: int, suffix: str) -> str:
    return text[:limit] + suffix if len(text) > limit else text


def export_filename(kind: str, today: Optional[date] = None) -> str:
    """
    Build the download filename of an export.

    Args:
        kind: "stats", "correlations" or "report"
        today: Date stamped into the name (defaults to today)

    Returns:
        Filename such as "eda-insights-2024-01-31.csv"
    """
    stamp = (today or date.today()).isoformat()
    prefix = config.EXPORT_FILE_PREFIX
    names = {
        "stats": f"{prefix}-insights-{stamp}.csv",
        "correlations": f"{prefix}-correlation-matrix-{stamp}.csv",
        "report": f"{prefix}-report-{stamp}.pdf",
    }
    if kind not in names:
        raise ValueError(f"Unknown export kind: {kind}")
    return names[kind]


# ============================================================================
# CSV exports
# ============================================================================

def stats_frame(result: ProfileResult) -> pd.DataFrame:
    """Summary statistics as a DataFrame of display strings, one row per column."""
    records = [
        {
            "Column": stat.name,
            "Type": stat.type.value,
            "Count": stat.count,
            "Null Count": stat.null_count,
            "Unique Count": stat.unique_count,
            "Mean": _fmt(stat.mean),
            "Median": _fmt(stat.median),
            "Std Dev": _fmt(stat.std),
            "Min": _fmt(stat.min),
            "Max": _fmt(stat.max),
            "Mode": stat.mode or MISSING,
        }
        for stat in result.stats
    ]
    return pd.DataFrame(records, columns=STATS_HEADERS)


def stats_to_csv(result: ProfileResult) -> str:
    """
    Render the summary statistics as CSV text.

    Absent values are written as "N/A"; an empty profile gives the header only.
    """
    return stats_frame(result).to_csv(index=False, lineterminator="\n")


def correlation_frame(result: ProfileResult) -> pd.DataFrame:
    """Correlation matrix as a DataFrame of formatted coefficients."""
    cols = result.numeric_columns
    records = [
        [col1] + [f"{result.correlations[col1][col2]:.{config.EXPORT_DECIMALS}f}" for col2 in cols]
        for col1 in cols
    ]
    return pd.DataFrame(records, columns=["Variable"] + list(cols))


def correlations_to_csv(result: ProfileResult) -> str:
    """
    Render the correlation matrix as CSV text.

    Raises:
        NotEnoughNumericColumnsError: If the profile has fewer than two numeric columns
    """
    if len(result.numeric_columns) < 2:
        raise NotEnoughNumericColumnsError("At least two numeric columns are required for a correlation matrix")
    return correlation_frame(result).to_csv(index=False, lineterminator="\n")


# ============================================================================
# PDF report
# ============================================================================

class _NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page i of n" on every page once the total is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int):
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawCentredString(
            width / 2, 10 * mm,
            f"{config.REPORT_TITLE} | Page {self._pageNumber} of {total}",
        )


def _table_style(header_rows: int = 1, header_cols: int = 0) -> TableStyle:
    commands = [
        ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.HexColor("#E5E7EB")),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    if header_cols:
        commands.append(("FONTNAME", (0, 0), (header_cols - 1, -1), "Helvetica-Bold"))
    return TableStyle(commands)


def _summary_rows(result: ProfileResult) -> List[List[str]]:
    rows = [["Column", "Type", "Count", "Null", "Unique", "Mean/Mode"]]
    for stat in result.stats[:config.REPORT_MAX_STATS_ROWS]:
        if stat.type == ColumnType.NUMERIC:
            headline = _fmt(stat.mean, config.REPORT_DECIMALS)
        else:
            headline = _shorten(stat.mode, 10, "") if stat.mode else MISSING
        rows.append([
            _shorten(stat.name, 15, "..."),
            stat.type.value,
            str(stat.count),
            str(stat.null_count),
            str(stat.unique_count),
            headline,
        ])
    return rows


def _correlation_rows(result: ProfileResult) -> List[List[str]]:
    cols = result.numeric_columns[:config.REPORT_MAX_CORRELATION_COLUMNS]
    rows = [[""] + [_shorten(col, 8, "..") for col in cols]]
    for col1 in cols:
        rows.append(
            [_shorten(col1, 12, "..")]
            + [f"{result.correlations[col1][col2]:.{config.REPORT_DECIMALS}f}" for col2 in cols]
        )
    return rows


def render_pdf_report(result: ProfileResult, generated_on: Optional[date] = None) -> bytes:
    """
    Render the analysis report as an A4 PDF.

    The report holds a dataset overview, the summary statistics of the first
    REPORT_MAX_STATS_ROWS columns and, when there are at least two numeric
    columns, the correlation matrix of the first REPORT_MAX_CORRELATION_COLUMNS
    numeric columns.

    Args:
        result: Profile to report on
        generated_on: Date printed under the title (defaults to today)

    Returns:
        PDF document bytes
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20 * mm,
        leftMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=config.REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ReportTitle",
        parent=styles["Heading1"],
        fontSize=18,
        alignment=TA_CENTER,
        spaceAfter=6,
    )
    centered = ParagraphStyle("Centered", parent=styles["Normal"], alignment=TA_CENTER)
    heading_style = styles["Heading2"]

    generated = (generated_on or date.today()).isoformat()
    story = [
        Paragraph(config.REPORT_TITLE, title_style),
        Paragraph(f"Generated on: {generated}", centered),
        Paragraph(f"Dataset: {len(result.rows):,} rows x {len(result.columns)} columns", centered),
        Spacer(1, 8 * mm),
        Paragraph("Dataset Overview", heading_style),
    ]
    for line in (
        f"Total Rows: {len(result.rows):,}",
        f"Total Columns: {len(result.columns)}",
        f"Numeric Columns: {len(result.numeric_columns)}",
        f"Categorical Columns: {len(result.categorical_columns)}",
    ):
        story.append(Paragraph(line, styles["Normal"]))

    story.append(Spacer(1, 6 * mm))
    story.append(Paragraph("Summary Statistics", heading_style))
    summary = Table(_summary_rows(result), repeatRows=1, hAlign="LEFT")
    summary.setStyle(_table_style())
    story.append(summary)

    if len(result.numeric_columns) >= 2:
        story.append(Spacer(1, 6 * mm))
        story.append(Paragraph("Correlation Matrix", heading_style))
        matrix = Table(_correlation_rows(result), repeatRows=1, hAlign="LEFT")
        matrix.setStyle(_table_style(header_cols=1))
        story.append(matrix)

    doc.build(story, canvasmaker=_NumberedCanvas)
    return buffer.getvalue()
