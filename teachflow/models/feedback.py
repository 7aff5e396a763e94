from datetime import datetime
from typing import Optional

from teachflow.models.base import DocumentModel


class Feedback(DocumentModel):
    class_id: str
    class_name: str
    student: str
    image: Optional[str] = None
    rating: float
    comment: str
    created_at: datetime
