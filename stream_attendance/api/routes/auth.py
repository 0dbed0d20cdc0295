import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import stream_attendance.controllers.auth as crud_auth
from stream_attendance.controllers.roles import is_admin
from stream_attendance.core.config import settings
from stream_attendance.core.identity import UnverifiedIdentity, VerifiedIdentity
from stream_attendance.core.local_identity import LOCAL_PROFILE_STORAGE_KEY, create_local_profile
from stream_attendance.core.permissions import get_member_identity, get_verified_identity
from stream_attendance.db.session import get_db
from stream_attendance.schemas.auth import IdentityOut, JoinRequest, JoinResponse, SignupRequest, Token
from stream_attendance.services.logging_service import LoggingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    try:
        profile = crud_auth.create_profile(db, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    token, _ = crud_auth.start_session(db, profile)
    return {"access_token": token, "token_type": "bearer"}


@router.post("/token", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    profile = crud_auth.authenticate(db, form_data.username, form_data.password)
    if not profile:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token, _ = crud_auth.start_session(db, profile)
    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(identity: VerifiedIdentity = Depends(get_verified_identity), db: Session = Depends(get_db)):
    crud_auth.end_session(db, identity)
    return None


@router.get("/session", response_model=IdentityOut)
def current_session(identity=Depends(get_member_identity), db: Session = Depends(get_db)):
    admin = isinstance(identity, VerifiedIdentity) and is_admin(db, identity.member_id)
    return IdentityOut(
        kind=identity.kind,
        email=identity.email,
        display_name=identity.display_name,
        member_id=identity.member_id,
        is_admin=admin,
    )


@router.post("/join", response_model=JoinResponse)
def join(payload: JoinRequest, request: Request, db: Session = Depends(get_db)):
    """Entry for unverified mode: hand back the profile for the browser to keep."""
    if settings.AUTH_MODE != "unverified":
        raise HTTPException(status_code=400, detail="Please sign in with your account")

    try:
        profile = create_local_profile(payload.email, payload.full_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        LoggingService.log_activity(
            db,
            UnverifiedIdentity(local_profile=profile),
            "JOIN",
            "Joined the live service",
            ip_address=request.client.host if request.client else None,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record join activity")

    return JoinResponse(
        message=f"Welcome to {settings.CHURCH_NAME}!",
        storage_key=LOCAL_PROFILE_STORAGE_KEY,
        profile=profile,
    )
