from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from teachflow.models.base import DocumentModel


class PaymentInfo(DocumentModel):
    transaction_id: Optional[str] = None
    method: Optional[str] = None
    amount: float
    paid_at: datetime


class Review(DocumentModel):
    rating: float
    comment: str
    reviewed_at: datetime


class Enrollment(DocumentModel):
    student_email: EmailStr
    class_id: str
    enrolled_at: datetime
    payment_info: PaymentInfo
    # filled at most once
    review: Optional[Review] = None
