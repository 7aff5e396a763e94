from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from teachflow.models.base import DocumentModel


class Payment(DocumentModel):
    class_id: str
    email: EmailStr
    amount: float
    method: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_at: datetime
