import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stream_attendance.controllers.stream_config import get_active_config
from stream_attendance.core.config import settings
from stream_attendance.core.permissions import get_member_identity
from stream_attendance.db.session import get_db
from stream_attendance.schemas.stream_config import StreamInfo
from stream_attendance.utils.embed import build_embed_url, build_watch_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stream"])


@router.get("/", response_model=StreamInfo)
def get_stream(identity=Depends(get_member_identity), db: Session = Depends(get_db)):
    try:
        config = get_active_config(db)
    except SQLAlchemyError:
        logger.exception("Error fetching stream config")
        config = None

    return StreamInfo(
        title=f"{settings.CHURCH_NAME} Live Stream",
        embed_url=build_embed_url(config, settings.DEFAULT_YOUTUBE_CHANNEL_ID),
        watch_url=build_watch_url(config, settings.DEFAULT_YOUTUBE_CHANNEL_ID),
    )
