import logging

from sqlalchemy.orm import Session

from stream_attendance import models  # noqa: F401  registers every table on Base
from stream_attendance.core.config import settings
from stream_attendance.core.security import get_password_hash
from stream_attendance.db.session import SessionLocal, Base, engine
from stream_attendance.models.profile import Profile
from stream_attendance.models.user_role import UserRole
from stream_attendance.schemas.role import RoleEnum

logger = logging.getLogger(__name__)


def seed_admin(db: Session, email: str, password: str, full_name: str) -> Profile:
    email = email.strip().lower()
    admin = db.query(Profile).filter(Profile.email == email).first()
    if not admin:
        admin = Profile(
            email=email,
            full_name=full_name,
            hashed_password=get_password_hash(password),
        )
        db.add(admin)
        db.flush()
        logger.info("Default admin profile created.")
    else:
        logger.info("Admin profile already exists.")

    role = (
        db.query(UserRole)
        .filter(UserRole.user_id == admin.id, UserRole.role == RoleEnum.admin)
        .first()
    )
    if not role:
        db.add(UserRole(user_id=admin.id, role=RoleEnum.admin))

    db.commit()
    return admin


def init_db():
    Base.metadata.create_all(bind=engine)

    if not (settings.DEFAULT_ADMIN_EMAIL and settings.DEFAULT_ADMIN_PASSWORD):
        logger.info("No default admin configured, skipping seed.")
        return

    db: Session = SessionLocal()
    try:
        seed_admin(db, settings.DEFAULT_ADMIN_EMAIL, settings.DEFAULT_ADMIN_PASSWORD, settings.DEFAULT_ADMIN_NAME)
    finally:
        db.close()
