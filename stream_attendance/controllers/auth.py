import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from stream_attendance.core import security
from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.core.session_store import AuthEvent, session_store
from stream_attendance.models.auth_session import AuthSession
from stream_attendance.models.profile import Profile
from stream_attendance.schemas.auth import SignupRequest
from stream_attendance.services.logging_service import LoggingService
from stream_attendance.utils.datetime_utils import utc_now
from stream_attendance.utils.logging_decorator import log_activity

logger = logging.getLogger(__name__)


def get_profile_by_email(db: Session, email: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.email == email.strip().lower()).first()


def create_profile(db: Session, payload: SignupRequest) -> Profile:
    email = payload.email.strip().lower()
    if get_profile_by_email(db, email):
        raise ValueError("An account with this email already exists")

    profile = Profile(
        email=email,
        full_name=payload.full_name,
        hashed_password=security.get_password_hash(payload.password),
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)

    LoggingService.log_activity(
        db,
        profile,
        "REGISTER",
        "Registered new account",
        table_name="profiles",
        record_id=profile.id,
    )
    logger.info(f"Created profile {profile.id}")
    return profile


def authenticate(db: Session, email: str, password: str) -> Optional[Profile]:
    profile = get_profile_by_email(db, email)
    if not profile or not security.verify_password(password, profile.hashed_password):
        return None
    return profile


@log_activity("LOGIN", "Logged into the system", table_name="auth_sessions")
def start_session(db: Session, profile: Profile) -> Tuple[str, VerifiedIdentity]:
    expires_at = security.token_expiry()
    session = AuthSession(
        id=security.new_session_id(),
        user_id=profile.id,
        expires_at=expires_at,
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    token = security.create_access_token({"sub": profile.email, "sid": session.id}, expires_at)
    identity = VerifiedIdentity(session=session, profile=profile)
    session_store.emit(AuthEvent.SIGNED_IN, identity)
    return token, identity


@log_activity("LOGOUT", "Logged out of the system", table_name="auth_sessions")
def end_session(db: Session, identity: VerifiedIdentity) -> None:
    session = identity.session
    if session.revoked_at is None:
        session.revoked_at = utc_now()
        db.add(session)
        db.commit()
    session_store.emit(AuthEvent.SIGNED_OUT, identity)
