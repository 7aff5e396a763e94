from pydantic import Field

from teachflow.schemas.base import ApiModel


class EnrollmentCount(ApiModel):
    total_enrollment: int


class ReviewCreate(ApiModel):
    rating: float = Field(ge=0, le=5)
    comment: str = Field(min_length=1)
