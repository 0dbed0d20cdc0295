import os

# Must be in place before anything from stream_attendance is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "testing"
os.environ["TIMEZONE"] = "UTC"
os.environ["AUTH_MODE"] = "verified"

import pytest
from fastapi.testclient import TestClient

from stream_attendance import models  # noqa: F401
from stream_attendance.controllers import auth as crud_auth
from stream_attendance.core.security import get_password_hash
from stream_attendance.db.session import Base, SessionLocal, engine
from stream_attendance.models.profile import Profile
from stream_attendance.models.user_role import UserRole
from stream_attendance.schemas.role import RoleEnum

TEST_PASSWORD = "secret123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_profile(db):
    def _make(email="member@example.com", full_name="Grace Member", admin=False):
        profile = Profile(
            email=email,
            full_name=full_name,
            hashed_password=get_password_hash(TEST_PASSWORD),
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        if admin:
            db.add(UserRole(user_id=profile.id, role=RoleEnum.admin))
            db.commit()
        return profile

    return _make


@pytest.fixture
def member(make_profile):
    return make_profile()


@pytest.fixture
def admin(make_profile):
    return make_profile(email="admin@example.com", full_name="Pastor Admin", admin=True)


@pytest.fixture
def auth_headers(db):
    def _headers(profile):
        token, _ = crud_auth.start_session(db, profile)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(db):
    from main import app

    return TestClient(app)
