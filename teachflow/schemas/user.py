from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, EmailStr, Field

from teachflow.models.user import Role
from teachflow.schemas.base import ApiModel


class UserUpsert(ApiModel):
    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    # only applied when the user is created, and then only "student"
    role: Optional[Role] = None
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("createdAt", "userCreatedAt", "created_at")
    )
    last_login: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("lastLogin", "lastLogIn", "last_login")
    )


class RoleUpdate(ApiModel):
    role: Role


class RoleRead(ApiModel):
    role: Optional[str] = None
