from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from teachflow.core.current_user import authenticate
from teachflow.core.deps import get_db
from teachflow.core.errors import Conflict, NotFound, ValidationError
from teachflow.core.identity import IdentityClaim
from teachflow.core.permissions import AUTHENTICATED, TEACHER_ONLY
from teachflow.db import collections
from teachflow.db.serialize import serialize_list
from teachflow.db.session import store_errors
from teachflow.models.enrollment import Review
from teachflow.schemas.enrollment import EnrollmentCount, ReviewCreate
from teachflow.schemas.results import UpdateResult

router = APIRouter()


@router.get("/enrollments", dependencies=AUTHENTICATED)
def list_enrollments(email: str | None = Query(None), db: Database = Depends(get_db)):
    if not email:
        raise ValidationError("Missing email")
    with store_errors("Failed to fetch enrollments"):
        return serialize_list(list(db[collections.ENROLLMENTS].find({"studentEmail": email})))


@router.get("/enrollments/count/{class_id}", response_model=EnrollmentCount, dependencies=TEACHER_ONLY)
def count_enrollments(class_id: str, db: Database = Depends(get_db)):
    with store_errors("Internal server error"):
        count = db[collections.ENROLLMENTS].count_documents({"classId": class_id})
    return EnrollmentCount(total_enrollment=count)


@router.patch("/enrollments/{class_id}/review", response_model=UpdateResult)
def review_enrollment(
    class_id: str,
    payload: ReviewCreate,
    db: Database = Depends(get_db),
    me: IdentityClaim = Depends(authenticate),
):
    enrollments = db[collections.ENROLLMENTS]
    review = Review(rating=payload.rating, comment=payload.comment, reviewed_at=datetime.now(timezone.utc))

    with store_errors("Failed to save review"):
        # review: None in the filter makes the write land at most once
        result = enrollments.update_one(
            {"classId": class_id, "studentEmail": me.email, "review": None},
            {"$set": {"review": review.to_document()}},
        )
        if result.matched_count == 0:
            if enrollments.find_one({"classId": class_id, "studentEmail": me.email}):
                raise Conflict("You have already reviewed this class")
            raise NotFound("Enrollment not found")

    return UpdateResult(matched_count=result.matched_count, modified_count=result.modified_count)
