from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple

# Inclusive end of a calendar day, millisecond precision
END_OF_DAY = time(23, 59, 59, 999000)


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime"""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetime is in UTC timezone"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local(dt: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    """Express a stored (UTC or naive-UTC) datetime in the given zone"""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(tz)


def local_today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    return to_local(now or utc_now(), tz).date()


def start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=tz)


def day_bounds_utc(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Half-open [start, next start) window of a local calendar day, in UTC"""
    start = start_of_day(day, tz)
    next_start = start_of_day(day + timedelta(days=1), tz)
    return start.astimezone(timezone.utc), next_start.astimezone(timezone.utc)
