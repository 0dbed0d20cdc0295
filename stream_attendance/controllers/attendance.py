import logging
from datetime import datetime, tzinfo
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from stream_attendance.core.config import settings
from stream_attendance.core.exceptions import AlreadyCheckedInError
from stream_attendance.core.identity import Identity, VerifiedIdentity
from stream_attendance.models.attendance import AttendanceRecord
from stream_attendance.schemas.attendance import AttendanceOut
from stream_attendance.utils.datetime_utils import day_bounds_utc, ensure_utc, local_today, utc_now
from stream_attendance.utils.logging_decorator import log_activity

logger = logging.getLogger(__name__)


def _owned_by(query, identity: Identity):
    if isinstance(identity, VerifiedIdentity):
        return query.filter(AttendanceRecord.user_id == identity.member_id)
    return query.filter(
        AttendanceRecord.user_id.is_(None),
        AttendanceRecord.attendee_email == identity.email,
    )


def find_today_record(
    db: Session,
    identity: Identity,
    tz: tzinfo,
    now: Optional[datetime] = None,
) -> Optional[AttendanceRecord]:
    """Existing check-in for the identity on the current local day, if any"""
    day_start, next_day_start = day_bounds_utc(local_today(tz, now), tz)
    query = db.query(AttendanceRecord).filter(
        AttendanceRecord.join_time >= day_start,
        AttendanceRecord.join_time < next_day_start,
    )
    return (
        _owned_by(query, identity)
        .order_by(AttendanceRecord.join_time.asc())
        .first()
    )


@log_activity(
    "CHECK_IN",
    lambda record, *args, **kwargs: f"Checked in to {record.stream_title or 'the live service'}",
    table_name="attendance",
    get_details=lambda record, *args, **kwargs: {"has_verification_code": bool(record.verification_code)},
)
def check_in(
    db: Session,
    identity: Identity,
    verification_code: Optional[str] = None,
    stream_title: Optional[str] = None,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> AttendanceRecord:
    """Record attendance for today unless the identity already has a record.

    The same-day check and the insert are separate statements, so two
    concurrent calls can both insert.
    """
    tz = tz or settings.tz
    now = ensure_utc(now) if now else utc_now()

    existing = find_today_record(db, identity, tz, now)
    if existing is not None:
        raise AlreadyCheckedInError(existing)

    record = AttendanceRecord(
        user_id=identity.member_id,
        attendee_name=identity.display_name,
        attendee_email=identity.email,
        join_time=now,
        stream_title=(stream_title or "").strip() or settings.DEFAULT_STREAM_TITLE,
        verification_code=(verification_code or "").strip() or None,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Attendance {record.id} recorded for {identity.kind} identity {identity.email}")
    return record


def list_recent_attendance(db: Session, limit: Optional[int] = None) -> List[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .options(joinedload(AttendanceRecord.profile))
        .order_by(AttendanceRecord.join_time.desc())
        .limit(limit or settings.ATTENDANCE_LIST_LIMIT)
        .all()
    )


def to_attendance_out(record: AttendanceRecord) -> AttendanceOut:
    profile = record.profile
    return AttendanceOut(
        id=record.id,
        member_id=record.user_id,
        full_name=profile.full_name if profile else record.attendee_name,
        email=profile.email if profile else record.attendee_email,
        join_time=ensure_utc(record.join_time),
        leave_time=ensure_utc(record.leave_time),
        duration_minutes=record.duration_minutes,
        stream_title=record.stream_title,
        verification_code=record.verification_code,
    )
