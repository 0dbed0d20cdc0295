import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from starlette import status

from stream_attendance.controllers.roles import find_role
from stream_attendance.core.config import settings
from stream_attendance.core.exceptions import RoleLookupError
from stream_attendance.core.identity import Identity, VerifiedIdentity
from stream_attendance.core.local_identity import LOCAL_PROFILE_HEADER, parse_local_profile
from stream_attendance.core.session_store import SessionContext, session_store
from stream_attendance.db.session import get_db
from stream_attendance.schemas.role import RoleEnum

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_DENIED = "You don't have admin access"


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_verified_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
):
    """Resolve the bearer token's session; the listener is dropped when the request ends."""
    token = credentials.credentials if credentials else None
    context = SessionContext.for_token(token)
    dispose = session_store.on_auth_state_change(context.apply)
    try:
        identity = session_store.get_session(db, token, context)
        if identity is None:
            raise _credentials_exception()
        yield identity
    finally:
        dispose()


def get_unverified_identity(
    local_profile: Optional[str] = Header(None, alias=LOCAL_PROFILE_HEADER),
) -> Identity:
    identity = parse_local_profile(local_profile)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please enter your details to join the live service",
        )
    return identity


def get_member_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    local_profile: Optional[str] = Header(None, alias=LOCAL_PROFILE_HEADER),
    db: Session = Depends(get_db),
):
    """Identity for member-facing endpoints, per the configured auth mode"""
    if settings.AUTH_MODE == "unverified":
        yield get_unverified_identity(local_profile)
        return

    yield from get_verified_identity(credentials, db)


def get_admin_identity(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Session = Depends(get_db),
) -> VerifiedIdentity:
    """Admin gate. A failed role lookup is treated the same as a missing role."""
    try:
        role = find_role(db, identity.member_id, RoleEnum.admin)
    except RoleLookupError:
        logger.exception("Error checking admin status")
        role = None

    if role is None:
        logger.warning(f"Admin access denied for profile {identity.member_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_DENIED)

    return identity
