"""
In-memory filtering of attendance rows by join date.

Rows are anything exposing a ``join_time`` attribute (ORM records or
``AttendanceOut`` schemas). Dates are calendar days in the given zone.
"""

from datetime import date, tzinfo
from typing import Iterable, List, Optional, TypeVar

from stream_attendance.utils.datetime_utils import end_of_day, start_of_day, to_local

Row = TypeVar("Row")


def matches_date_range(join_time, start: Optional[date], end: Optional[date], tz: tzinfo) -> bool:
    if join_time is None:
        return False

    joined = to_local(join_time, tz)
    if start and joined < start_of_day(start, tz):
        return False
    if end and joined > end_of_day(end, tz):
        return False
    return True


def filter_by_join_date(
    records: Iterable[Row],
    start: Optional[date],
    end: Optional[date],
    tz: tzinfo,
) -> List[Row]:
    """Keep rows whose join time falls in [start 00:00:00, end 23:59:59.999].

    Either bound may be omitted. Rows without a join time never match.
    """
    return [r for r in records if matches_date_range(r.join_time, start, end, tz)]


def count_today(records: Iterable[Row], today: date, tz: tzinfo) -> int:
    return sum(
        1 for r in records
        if r.join_time is not None and to_local(r.join_time, tz).date() == today
    )
