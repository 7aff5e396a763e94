from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from teachflow.models.base import DocumentModel
from teachflow.models.review_status import ReviewStatus


class TeacherApplication(DocumentModel):
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None
    experience: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    status: ReviewStatus = ReviewStatus.pending
    created_at: datetime

    class Config:
        extra = "allow"
