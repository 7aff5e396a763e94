from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from teachflow.schemas.base import ApiModel


class ClassCreate(ApiModel):
    class_id: Optional[str] = None
    teacher_email: EmailStr
    teacher_name: Optional[str] = None
    title: str = Field(min_length=1, max_length=255)
    price: float = Field(default=0, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None


class ClassCreated(ApiModel):
    inserted_id: str
    class_id: str


class ClassUpdate(ApiModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None


class AssignmentCreate(ApiModel):
    title: Optional[str] = None
    content: str = Field(min_length=1)
    deadline: Optional[datetime] = None


class AssignmentSubmit(ApiModel):
    class_id: str = Field(min_length=1)
    assignment_index: int = Field(ge=0)
    student_email: EmailStr
    student_name: Optional[str] = None
    submission_text: str = Field(min_length=1)


class SubmitResult(ApiModel):
    success: bool = True
