import pytest

from stream_attendance.controllers import auth as crud_auth
from stream_attendance.controllers import stream_config as crud_stream
from stream_attendance.models.stream_config import StreamConfig
from stream_attendance.models.system_log import SystemLog


@pytest.fixture
def editor(db, admin):
    _, identity = crud_auth.start_session(db, admin)
    return identity


def test_no_active_config(db):
    assert crud_stream.get_active_config(db) is None


def test_first_save_inserts_active_row(db, editor):
    config, created = crud_stream.save_stream_config(db, editor, "UCchurch", "")

    assert created is True
    assert config.is_active is True
    assert config.youtube_channel_id == "UCchurch"
    assert config.youtube_video_id is None
    assert config.updated_by == editor.member_id


def test_second_save_updates_in_place(db, editor):
    first, _ = crud_stream.save_stream_config(db, editor, "UCchurch", None)
    second, created = crud_stream.save_stream_config(db, editor, "  ", "abc123")

    assert created is False
    assert second.id == first.id
    assert second.youtube_channel_id is None
    assert second.youtube_video_id == "abc123"
    assert second.updated_at is not None
    assert db.query(StreamConfig).count() == 1


def test_inactive_rows_are_ignored(db, editor):
    db.add(StreamConfig(youtube_channel_id="UCold", is_active=False))
    db.commit()

    assert crud_stream.get_active_config(db) is None
    _, created = crud_stream.save_stream_config(db, editor, "UCnew", None)
    assert created is True


def test_saves_are_logged_as_create_then_update(db, editor):
    crud_stream.save_stream_config(db, editor, "UCchurch", None)
    crud_stream.save_stream_config(db, editor, None, "abc123")

    actions = [
        log.action for log in
        db.query(SystemLog).filter(SystemLog.table_name == "stream_config").order_by(SystemLog.id).all()
    ]
    assert actions == ["CREATE", "UPDATE"]
