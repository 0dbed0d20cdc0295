from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class CheckInRequest(BaseModel):
    verification_code: Optional[str] = None
    stream_title: Optional[str] = None


class AttendanceOut(BaseModel):
    id: int
    member_id: Optional[int] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    join_time: Optional[datetime] = None
    leave_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    stream_title: Optional[str] = None
    verification_code: Optional[str] = None


class CheckInResponse(BaseModel):
    message: str
    record: AttendanceOut


class CheckInStatus(BaseModel):
    checked_in: bool
    record: Optional[AttendanceOut] = None


class AttendanceListOut(BaseModel):
    records: List[AttendanceOut]
    total: int
    filtered_total: int
    today_count: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    message: Optional[str] = None
