"""
Who is using the app for the current request.

An identity is either verified (an account with a live auth session) or
unverified (a name/email the browser kept in local storage). Handlers receive
one of these explicitly instead of reading shared state.
"""

from dataclasses import dataclass
from typing import Optional, Union

from stream_attendance.models.auth_session import AuthSession
from stream_attendance.models.profile import Profile
from stream_attendance.schemas.auth import LocalProfile


@dataclass(frozen=True)
class VerifiedIdentity:
    session: AuthSession
    profile: Profile
    kind: str = "verified"

    @property
    def email(self) -> str:
        return self.profile.email

    @property
    def display_name(self) -> str:
        return self.profile.full_name or self.profile.email

    @property
    def member_id(self) -> Optional[int]:
        return self.profile.id

    @property
    def session_id(self) -> str:
        return self.session.id


@dataclass(frozen=True)
class UnverifiedIdentity:
    local_profile: LocalProfile
    kind: str = "unverified"

    @property
    def email(self) -> str:
        return self.local_profile.email

    @property
    def display_name(self) -> str:
        return self.local_profile.full_name or self.local_profile.email

    @property
    def member_id(self) -> Optional[int]:
        return None


Identity = Union[VerifiedIdentity, UnverifiedIdentity]
