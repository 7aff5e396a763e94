from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from teachflow.core.current_user import authenticate
from teachflow.core.deps import get_db
from teachflow.core.errors import Conflict, Forbidden
from teachflow.core.identity import IdentityClaim
from teachflow.db import collections
from teachflow.db.serialize import serialize_list
from teachflow.db.session import store_errors
from teachflow.models.feedback import Feedback
from teachflow.schemas.feedback import FeedbackCreate, FeedbackCreated

router = APIRouter()


@router.get("/feedback")
def list_feedback(db: Database = Depends(get_db)):
    with store_errors("Internal server error"):
        return serialize_list(list(db[collections.FEEDBACK].find()))


@router.post(
    "/feedback",
    response_model=FeedbackCreated,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Feedback already submitted for this class"}},
)
def submit_feedback(
    payload: FeedbackCreate,
    db: Database = Depends(get_db),
    me: IdentityClaim = Depends(authenticate),
):
    if not me.email:
        raise Forbidden("Forbidden: No email in token")
    feedback = db[collections.FEEDBACK]

    with store_errors("Internal server error"):
        # one feedback per (class, verified student); never overwritten
        if feedback.find_one({"classId": payload.class_id, "student": me.email}):
            raise Conflict("You have already submitted feedback for this class")

        doc = Feedback(
            class_id=payload.class_id,
            class_name=payload.title,
            student=me.email,
            image=payload.image,
            rating=payload.rating,
            comment=payload.comment,
            created_at=datetime.now(timezone.utc),
        )
        result = feedback.insert_one(doc.to_document())

    return FeedbackCreated(message="Feedback submitted successfully", feedback_id=str(result.inserted_id))
