from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stream_attendance.db.session import Base


class StreamConfig(Base):
    __tablename__ = "stream_config"

    id = Column(Integer, primary_key=True, index=True)
    youtube_channel_id = Column(String, nullable=True)
    youtube_video_id = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    updated_by = Column(Integer, ForeignKey("profiles.id"), nullable=True)

    editor = relationship("Profile")
