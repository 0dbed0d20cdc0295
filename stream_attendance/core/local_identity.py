import json
import logging
from typing import Optional

from pydantic import ValidationError

from stream_attendance.core.identity import UnverifiedIdentity
from stream_attendance.schemas.auth import LocalProfile
from stream_attendance.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

LOCAL_PROFILE_HEADER = "X-Local-Profile"
LOCAL_PROFILE_STORAGE_KEY = "user"


def create_local_profile(email: str, full_name: str) -> LocalProfile:
    email = (email or "").strip().lower()
    full_name = (full_name or "").strip()
    if not email or not full_name:
        raise ValueError("Please fill in all fields")
    return LocalProfile(email=email, full_name=full_name, joined_at=utc_now())


def parse_local_profile(raw: Optional[str]) -> Optional[UnverifiedIdentity]:
    """Identity from the JSON blob the browser echoes back, if it is usable"""
    if not raw:
        return None
    try:
        profile = LocalProfile.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        logger.debug(f"Ignoring malformed local profile: {e}")
        return None
    if not profile.email.strip():
        return None
    return UnverifiedIdentity(local_profile=profile)
