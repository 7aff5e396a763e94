from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from teachflow.models.base import DocumentModel


class Role(str, Enum):
    admin = "admin"
    teacher = "teacher"
    student = "student"


class User(DocumentModel):
    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    # None means the user has not picked a role yet
    role: Optional[Role] = None
    created_at: datetime
    last_login: datetime
