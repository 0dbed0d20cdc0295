import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import stream_attendance.controllers.attendance as crud_attendance
from stream_attendance.core.config import settings
from stream_attendance.core.exceptions import AlreadyCheckedInError
from stream_attendance.core.permissions import get_member_identity
from stream_attendance.db.session import get_db
from stream_attendance.schemas.attendance import CheckInRequest, CheckInResponse, CheckInStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Attendance"])


@router.post("/check-in", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED)
def check_in(
    payload: CheckInRequest,
    identity=Depends(get_member_identity),
    db: Session = Depends(get_db),
):
    try:
        record = crud_attendance.check_in(
            db,
            identity,
            verification_code=payload.verification_code,
            stream_title=payload.stream_title,
        )
    except AlreadyCheckedInError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error marking attendance")
        raise HTTPException(status_code=500, detail="Failed to mark attendance")

    return CheckInResponse(
        message="Attendance marked successfully!",
        record=crud_attendance.to_attendance_out(record),
    )


@router.get("/check-in/today", response_model=CheckInStatus)
def check_in_status(identity=Depends(get_member_identity), db: Session = Depends(get_db)):
    try:
        record = crud_attendance.find_today_record(db, identity, settings.tz)
    except SQLAlchemyError:
        logger.exception("Error loading today's check-in")
        raise HTTPException(status_code=500, detail="Failed to load check-in status")

    if record is None:
        return CheckInStatus(checked_in=False)
    return CheckInStatus(checked_in=True, record=crud_attendance.to_attendance_out(record))
