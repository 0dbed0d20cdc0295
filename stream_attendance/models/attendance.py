from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from stream_attendance.db.session import Base
from stream_attendance.utils.datetime_utils import utc_now


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)

    # Null for check-ins made with an unverified local profile
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=True, index=True)
    attendee_name = Column(String, nullable=True)
    attendee_email = Column(String, nullable=True, index=True)

    join_time = Column(DateTime(timezone=True), default=utc_now, nullable=True, index=True)
    leave_time = Column(DateTime(timezone=True), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    stream_title = Column(String, nullable=True)
    verification_code = Column(String, nullable=True)

    profile = relationship("Profile", back_populates="attendance")
