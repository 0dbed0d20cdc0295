from datetime import datetime, timedelta, timezone

import pytest

from stream_attendance.controllers import attendance as crud_attendance
from stream_attendance.controllers import auth as crud_auth
from stream_attendance.core.exceptions import AlreadyCheckedInError
from stream_attendance.core.local_identity import create_local_profile
from stream_attendance.core.identity import UnverifiedIdentity
from stream_attendance.models.attendance import AttendanceRecord
from stream_attendance.models.system_log import SystemLog

UTC = timezone.utc
SUNDAY = datetime(2024, 1, 7, 9, 0, tzinfo=UTC)


@pytest.fixture
def verified(db, member):
    _, identity = crud_auth.start_session(db, member)
    return identity


@pytest.fixture
def guest():
    return UnverifiedIdentity(local_profile=create_local_profile("guest@example.com", "Visiting Guest"))


def test_check_in_creates_record(db, verified):
    record = crud_attendance.check_in(db, verified, verification_code="  JOHN316 ", now=SUNDAY, tz=UTC)

    assert record.id is not None
    assert record.user_id == verified.member_id
    assert record.verification_code == "JOHN316"
    assert record.stream_title == "Sunday Service"
    assert db.query(AttendanceRecord).count() == 1


def test_blank_verification_code_is_stored_as_null(db, verified):
    record = crud_attendance.check_in(db, verified, verification_code="   ", stream_title="Bible Study", now=SUNDAY, tz=UTC)

    assert record.verification_code is None
    assert record.stream_title == "Bible Study"


def test_second_check_in_same_day_is_refused(db, verified):
    first = crud_attendance.check_in(db, verified, now=SUNDAY, tz=UTC)

    with pytest.raises(AlreadyCheckedInError) as exc:
        crud_attendance.check_in(db, verified, now=SUNDAY + timedelta(hours=3), tz=UTC)

    assert exc.value.record.id == first.id
    assert db.query(AttendanceRecord).count() == 1


def test_check_in_next_day_is_allowed(db, verified):
    crud_attendance.check_in(db, verified, now=SUNDAY, tz=UTC)
    crud_attendance.check_in(db, verified, now=SUNDAY + timedelta(days=1), tz=UTC)

    assert db.query(AttendanceRecord).count() == 2


def test_guest_check_in_is_deduplicated_by_email(db, guest):
    record = crud_attendance.check_in(db, guest, now=SUNDAY, tz=UTC)

    assert record.user_id is None
    assert record.attendee_email == "guest@example.com"
    assert record.attendee_name == "Visiting Guest"

    with pytest.raises(AlreadyCheckedInError):
        crud_attendance.check_in(db, guest, now=SUNDAY + timedelta(minutes=5), tz=UTC)


def test_guest_and_member_with_same_email_are_separate(db, make_profile, guest):
    profile = make_profile(email="guest@example.com", full_name="Now A Member")
    _, verified = crud_auth.start_session(db, profile)

    crud_attendance.check_in(db, guest, now=SUNDAY, tz=UTC)
    crud_attendance.check_in(db, verified, now=SUNDAY, tz=UTC)

    assert db.query(AttendanceRecord).count() == 2


def test_find_today_record(db, verified):
    assert crud_attendance.find_today_record(db, verified, UTC, now=SUNDAY) is None

    record = crud_attendance.check_in(db, verified, now=SUNDAY, tz=UTC)

    found = crud_attendance.find_today_record(db, verified, UTC, now=SUNDAY + timedelta(hours=10))
    assert found is not None and found.id == record.id
    assert crud_attendance.find_today_record(db, verified, UTC, now=SUNDAY + timedelta(days=1)) is None


def test_check_in_is_logged(db, verified):
    record = crud_attendance.check_in(db, verified, now=SUNDAY, tz=UTC)

    log = db.query(SystemLog).filter(SystemLog.action == "CHECK_IN").one()
    assert log.record_id == record.id
    assert log.actor_id == verified.member_id
    assert log.description == "Checked in to Sunday Service"


def test_list_recent_attendance_newest_first_and_limited(db, member):
    for day in range(5):
        db.add(AttendanceRecord(user_id=member.id, join_time=SUNDAY + timedelta(days=day), stream_title="Daily"))
    db.commit()

    records = crud_attendance.list_recent_attendance(db, limit=3)

    assert len(records) == 3
    join_times = [r.join_time for r in records]
    assert join_times == sorted(join_times, reverse=True)


def test_to_attendance_out_uses_profile_or_snapshot(db, member):
    linked = AttendanceRecord(user_id=member.id, join_time=SUNDAY)
    guest_row = AttendanceRecord(attendee_name="Visiting Guest", attendee_email="guest@example.com", join_time=SUNDAY)
    db.add_all([linked, guest_row])
    db.commit()

    out_linked = crud_attendance.to_attendance_out(linked)
    out_guest = crud_attendance.to_attendance_out(guest_row)

    assert (out_linked.full_name, out_linked.email) == (member.full_name, member.email)
    assert (out_guest.full_name, out_guest.email) == ("Visiting Guest", "guest@example.com")
    assert out_guest.join_time.tzinfo is not None
