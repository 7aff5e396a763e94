from typing import Optional

from pydantic import Field

from teachflow.schemas.base import ApiModel


class FeedbackCreate(ApiModel):
    class_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    # the author is the verified caller; a body "student" is ignored
    student: Optional[str] = None
    image: Optional[str] = None
    rating: float = Field(ge=0, le=5)
    comment: str = Field(min_length=1)


class FeedbackCreated(ApiModel):
    message: str
    feedback_id: str
