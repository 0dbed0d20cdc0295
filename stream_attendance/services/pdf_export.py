"""
Attendance report rendering.

Builds the downloadable PDF for the admin view from an already filtered set of
rows, plus the filename and subtitle that describe the active date range.
"""

from datetime import date, tzinfo
import io
import logging
from typing import List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from stream_attendance.core.exceptions import EmptyExportError
from stream_attendance.schemas.attendance import AttendanceOut
from stream_attendance.utils.datetime_utils import to_local

logger = logging.getLogger(__name__)

REPORT_TITLE = "Attendance Report"
TABLE_HEADER = ["Name", "Email", "Stream", "Join Time", "Duration (min)"]
HEADER_FILL = colors.Color(139 / 255, 0, 0)
MISSING_PERSON = "N/A"
MISSING_VALUE = "—"

DATE_FORMAT = "%b %d, %Y"
DATETIME_FORMAT = "%b %d, %Y %H:%M"


def build_export_filename(start: Optional[date], end: Optional[date], today: date) -> str:
    if start and end:
        return f"attendance_{start.isoformat()}_to_{end.isoformat()}.pdf"
    return f"attendance_{today.isoformat()}.pdf"


def build_subtitle(start: Optional[date], end: Optional[date], today: date) -> str:
    if start and end:
        return f"Period: {start.strftime(DATE_FORMAT)} - {end.strftime(DATE_FORMAT)}"
    if start:
        return f"From: {start.strftime(DATE_FORMAT)}"
    if end:
        return f"Until: {end.strftime(DATE_FORMAT)}"
    return f"Generated: {today.strftime(DATE_FORMAT)}"


def build_table_rows(rows: Sequence[AttendanceOut], tz: tzinfo) -> List[List[str]]:
    body = []
    for row in rows:
        join_time = to_local(row.join_time, tz)
        body.append([
            row.full_name or MISSING_PERSON,
            row.email or MISSING_PERSON,
            row.stream_title or MISSING_VALUE,
            join_time.strftime(DATETIME_FORMAT) if join_time else MISSING_VALUE,
            str(row.duration_minutes) if row.duration_minutes is not None else MISSING_VALUE,
        ])
    return body


def render_attendance_pdf(
    rows: Sequence[AttendanceOut],
    start: Optional[date],
    end: Optional[date],
    today: date,
    tz: tzinfo,
) -> bytes:
    """PDF bytes for the given rows. Refuses to produce an empty report."""
    if not rows:
        raise EmptyExportError()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=14 * mm,
        bottomMargin=14 * mm,
        title=REPORT_TITLE,
    )

    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"].clone("AttendanceCell", fontSize=9, leading=11)

    data = [TABLE_HEADER] + [
        [Paragraph(_escape(value), cell_style) for value in row]
        for row in build_table_rows(rows, tz)
    ]
    table = Table(data, repeatRows=1, colWidths=[38 * mm, 50 * mm, 34 * mm, 34 * mm, 26 * mm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))

    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(build_subtitle(start, end, today), styles["Normal"]),
        Spacer(1, 6 * mm),
        table,
    ]
    doc.build(story)

    logger.info(f"Rendered attendance report with {len(rows)} rows")
    return buffer.getvalue()


def _escape(value: str) -> str:
    # Paragraph parses a small XML dialect
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
