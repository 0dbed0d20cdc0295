import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.models.stream_config import StreamConfig
from stream_attendance.utils.datetime_utils import utc_now
from stream_attendance.utils.logging_decorator import log_create, log_update

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def get_active_config(db: Session) -> Optional[StreamConfig]:
    """The config row viewers currently see, or None when none is active.

    Nothing stops several rows being active; the newest one wins.
    """
    return (
        db.query(StreamConfig)
        .filter(StreamConfig.is_active.is_(True))
        .order_by(StreamConfig.id.desc())
        .first()
    )


@log_update("stream_config", "Updated stream configuration")
def update_config(
    db: Session,
    editor: VerifiedIdentity,
    config: StreamConfig,
    channel_id: Optional[str],
    video_id: Optional[str],
) -> StreamConfig:
    config.youtube_channel_id = _blank_to_none(channel_id)
    config.youtube_video_id = _blank_to_none(video_id)
    config.updated_at = utc_now()
    config.updated_by = editor.member_id
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


@log_create("stream_config", "Created stream configuration")
def create_config(
    db: Session,
    editor: VerifiedIdentity,
    channel_id: Optional[str],
    video_id: Optional[str],
) -> StreamConfig:
    config = StreamConfig(
        youtube_channel_id=_blank_to_none(channel_id),
        youtube_video_id=_blank_to_none(video_id),
        is_active=True,
        updated_at=utc_now(),
        updated_by=editor.member_id,
    )
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


def save_stream_config(
    db: Session,
    editor: VerifiedIdentity,
    channel_id: Optional[str],
    video_id: Optional[str],
) -> Tuple[StreamConfig, bool]:
    """Update the active row in place, or create the first one.

    Returns the saved row and whether it was newly created.
    """
    existing = get_active_config(db)
    if existing is not None:
        return update_config(db, editor, existing, channel_id, video_id), False

    logger.info("No active stream configuration, creating one")
    return create_config(db, editor, channel_id, video_id), True
