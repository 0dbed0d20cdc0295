import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stream_attendance.core.exceptions import RoleLookupError
from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.models.profile import Profile
from stream_attendance.models.user_role import UserRole
from stream_attendance.schemas.role import RoleEnum
from stream_attendance.utils.logging_decorator import log_create

logger = logging.getLogger(__name__)


def find_role(db: Session, user_id: int, role: RoleEnum) -> Optional[UserRole]:
    """The matching role row if the user holds it, None if not"""
    try:
        return (
            db.query(UserRole)
            .filter(UserRole.user_id == user_id, UserRole.role == role)
            .first()
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise RoleLookupError(f"Role lookup failed for user {user_id}") from e


def is_admin(db: Session, user_id: int) -> bool:
    try:
        return find_role(db, user_id, RoleEnum.admin) is not None
    except RoleLookupError:
        logger.exception("Error checking admin status")
        return False


@log_create("user_roles", lambda role, *args, **kwargs: f"Granted {role.role.value} role to user {role.user_id}")
def grant_role(db: Session, granted_by: VerifiedIdentity, user_id: int, role: RoleEnum) -> UserRole:
    if db.query(Profile).filter(Profile.id == user_id).first() is None:
        raise ValueError(f"Profile with id '{user_id}' not found")

    existing = find_role(db, user_id, role)
    if existing is not None:
        return existing

    user_role = UserRole(user_id=user_id, role=role)
    db.add(user_role)
    db.commit()
    db.refresh(user_role)
    return user_role
