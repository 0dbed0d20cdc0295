from enum import Enum

from pydantic import BaseModel


class RoleEnum(str, Enum):
    admin = "admin"
    member = "member"


class RoleGrant(BaseModel):
    user_id: int
    role: RoleEnum = RoleEnum.admin


class RoleOut(BaseModel):
    id: int
    user_id: int
    role: RoleEnum

    class Config:
        from_attributes = True
