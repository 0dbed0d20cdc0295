from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stream_attendance.db.session import Base


class SystemLog(Base):
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)

    # Null when the actor is an unverified local profile
    actor_id = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    actor_name = Column(String, nullable=False)
    actor_email = Column(String, nullable=True)

    action = Column(String, nullable=False, index=True)  # e.g. "CHECK_IN", "LOGIN", "UPDATE"
    description = Column(Text, nullable=False)
    table_name = Column(String, nullable=True)
    record_id = Column(Integer, nullable=True)

    details = Column(JSON, nullable=True)
    ip_address = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    actor = relationship("Profile")
