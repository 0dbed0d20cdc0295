from datetime import date, datetime, timezone

import pytest

from stream_attendance.core.exceptions import EmptyExportError
from stream_attendance.schemas.attendance import AttendanceOut
from stream_attendance.services.pdf_export import (
    build_export_filename,
    build_subtitle,
    build_table_rows,
    render_attendance_pdf,
)

UTC = timezone.utc
TODAY = date(2024, 1, 12)


def make_row(**overrides):
    values = dict(
        id=1,
        full_name="Grace Member",
        email="grace@example.com",
        join_time=datetime(2024, 1, 5, 9, 30, tzinfo=UTC),
        stream_title="Sunday Service",
        duration_minutes=95,
    )
    values.update(overrides)
    return AttendanceOut(**values)


def test_filename_uses_range_when_both_dates_given():
    assert build_export_filename(date(2024, 1, 5), date(2024, 1, 10), TODAY) == "attendance_2024-01-05_to_2024-01-10.pdf"


@pytest.mark.parametrize("start,end", [(None, None), (date(2024, 1, 5), None), (None, date(2024, 1, 10))])
def test_filename_falls_back_to_today(start, end):
    assert build_export_filename(start, end, TODAY) == "attendance_2024-01-12.pdf"


def test_subtitles():
    assert build_subtitle(date(2024, 1, 5), date(2024, 1, 10), TODAY) == "Period: Jan 05, 2024 - Jan 10, 2024"
    assert build_subtitle(date(2024, 1, 5), None, TODAY) == "From: Jan 05, 2024"
    assert build_subtitle(None, date(2024, 1, 10), TODAY) == "Until: Jan 10, 2024"
    assert build_subtitle(None, None, TODAY) == "Generated: Jan 12, 2024"


def test_table_rows_fill_placeholders():
    rows = build_table_rows([
        make_row(),
        make_row(id=2, full_name=None, email=None, stream_title=None, join_time=None, duration_minutes=None),
    ], UTC)

    assert rows[0] == ["Grace Member", "grace@example.com", "Sunday Service", "Jan 05, 2024 09:30", "95"]
    assert rows[1] == ["N/A", "N/A", "—", "—", "—"]


def test_render_produces_pdf_bytes():
    content = render_attendance_pdf([make_row(full_name="A & B <Choir>")], date(2024, 1, 5), date(2024, 1, 5), TODAY, UTC)
    assert content.startswith(b"%PDF")


def test_render_refuses_empty_rows():
    with pytest.raises(EmptyExportError) as exc:
        render_attendance_pdf([], None, None, TODAY, UTC)
    assert str(exc.value) == "No attendance records found for the selected date range"
