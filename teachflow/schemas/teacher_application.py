from typing import Optional

from pydantic import EmailStr

from teachflow.models.review_status import ReviewStatus
from teachflow.schemas.base import ApiModel


class TeacherApplicationCreate(ApiModel):
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None
    experience: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None

    class Config:
        extra = "allow"


class StatusUpdate(ApiModel):
    status: ReviewStatus
