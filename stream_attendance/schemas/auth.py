from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, constr, field_validator


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SignupRequest(BaseModel):
    email: EmailStr
    full_name: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=6)


class JoinRequest(BaseModel):
    # Blank values are rejected by the route with a friendly message
    email: str = ""
    full_name: str = ""


class LocalProfile(BaseModel):
    """The identity blob the browser keeps under the ``user`` storage key."""
    email: str
    full_name: str = Field(alias="fullName")
    joined_at: datetime = Field(alias="joinedAt")

    @field_validator("email")
    @classmethod
    def normalise_email(cls, value: str) -> str:
        return value.strip().lower()

    class Config:
        populate_by_name = True


class JoinResponse(BaseModel):
    message: str
    storage_key: str = "user"
    profile: LocalProfile


class IdentityOut(BaseModel):
    kind: Literal["verified", "unverified"]
    email: str
    display_name: str
    member_id: Optional[int] = None
    is_admin: bool = False
