from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from teachflow.models.base import DocumentModel
from teachflow.models.review_status import ReviewStatus


class AssignmentSubmission(DocumentModel):
    student_email: EmailStr
    student_name: Optional[str] = None
    submission_text: str
    submitted_at: datetime


class Assignment(DocumentModel):
    title: Optional[str] = None
    content: str
    deadline: Optional[datetime] = None
    created_at: datetime
    submissions: List[AssignmentSubmission] = Field(default_factory=list)
    submission_count: int = 0


class Classroom(DocumentModel):
    class_id: str
    teacher_email: EmailStr
    teacher_name: Optional[str] = None
    title: str
    price: float
    description: Optional[str] = None
    image: Optional[str] = None
    status: ReviewStatus = ReviewStatus.pending
    assignments: List[Assignment] = Field(default_factory=list)
    total_submissions: int = 0
    created_at: datetime
