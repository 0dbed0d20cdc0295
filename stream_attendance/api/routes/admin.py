import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import stream_attendance.controllers.attendance as crud_attendance
import stream_attendance.controllers.roles as crud_roles
import stream_attendance.controllers.stream_config as crud_stream
from stream_attendance.core.config import settings
from stream_attendance.core.exceptions import EmptyExportError
from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.core.permissions import get_admin_identity
from stream_attendance.db.session import get_db
from stream_attendance.schemas.attendance import AttendanceListOut, AttendanceOut
from stream_attendance.schemas.role import RoleGrant, RoleOut
from stream_attendance.schemas.stream_config import AdminStreamConfigOut, StreamConfigIn, StreamConfigOut, StreamConfigSaved
from stream_attendance.schemas.system_log import SystemLogOut, SystemLogPage
from stream_attendance.services import pdf_export
from stream_attendance.services.logging_service import LoggingService
from stream_attendance.utils.date_filters import count_today, filter_by_join_date
from stream_attendance.utils.datetime_utils import local_today
from stream_attendance.utils.embed import build_embed_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])


def _load_recent_attendance(db: Session) -> List[AttendanceOut]:
    try:
        records = crud_attendance.list_recent_attendance(db)
    except SQLAlchemyError:
        logger.exception("Error fetching attendance")
        raise HTTPException(status_code=500, detail="Failed to load attendance records")
    return [crud_attendance.to_attendance_out(r) for r in records]


@router.get("/attendance", response_model=AttendanceListOut)
def list_attendance(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    tz = settings.tz
    rows = _load_recent_attendance(db)
    filtered = filter_by_join_date(rows, start_date, end_date, tz)

    message = None
    if not rows:
        message = "No attendance records yet"
    elif not filtered:
        message = "No attendance records found for the selected date range"

    return AttendanceListOut(
        records=filtered,
        total=len(rows),
        filtered_total=len(filtered),
        today_count=count_today(rows, local_today(tz), tz),
        start_date=start_date,
        end_date=end_date,
        message=message,
    )


@router.get("/attendance/export")
def export_attendance(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    tz = settings.tz
    today = local_today(tz)
    filtered = filter_by_join_date(_load_recent_attendance(db), start_date, end_date, tz)

    try:
        content = pdf_export.render_attendance_pdf(filtered, start_date, end_date, today, tz)
    except EmptyExportError as e:
        raise HTTPException(status_code=404, detail=str(e))

    filename = pdf_export.build_export_filename(start_date, end_date, today)
    try:
        LoggingService.log_activity(
            db,
            admin,
            "DOWNLOAD",
            f"Downloaded {filename}",
            table_name="attendance",
            details={"rows": len(filtered)},
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record export activity")

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/stream-config", response_model=AdminStreamConfigOut)
def get_stream_config(
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    try:
        config = crud_stream.get_active_config(db)
    except SQLAlchemyError:
        logger.exception("Error fetching stream config")
        config = None

    return AdminStreamConfigOut(
        config=StreamConfigOut.model_validate(config) if config else None,
        embed_url=build_embed_url(config, settings.DEFAULT_YOUTUBE_CHANNEL_ID),
    )


@router.put("/stream-config", response_model=StreamConfigSaved)
def save_stream_config(
    payload: StreamConfigIn,
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    try:
        config, created = crud_stream.save_stream_config(
            db,
            admin,
            payload.youtube_channel_id,
            payload.youtube_video_id,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving stream config")
        raise HTTPException(status_code=500, detail="Failed to save stream configuration")

    return StreamConfigSaved(
        message="Stream configuration updated successfully",
        created=created,
        config=StreamConfigOut.model_validate(config),
        embed_url=build_embed_url(config, settings.DEFAULT_YOUTUBE_CHANNEL_ID),
    )


@router.post("/roles", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def grant_role(
    payload: RoleGrant,
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    try:
        return crud_roles.grant_role(db, admin, payload.user_id, payload.role)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/system-logs", response_model=SystemLogPage)
def list_system_logs(
    action: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    admin: VerifiedIdentity = Depends(get_admin_identity),
    db: Session = Depends(get_db),
):
    logs, total = LoggingService.list_logs(db, action=action, skip=skip, limit=limit)
    return SystemLogPage(
        logs=[SystemLogOut.model_validate(log) for log in logs],
        total=total,
        skip=skip,
        limit=limit,
    )
