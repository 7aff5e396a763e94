from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pymongo.database import Database

from teachflow.core.deps import get_db
from teachflow.core.errors import NotFound
from teachflow.core.permissions import AUTHENTICATED
from teachflow.db import collections
from teachflow.db.session import store_errors
from teachflow.models.classroom import AssignmentSubmission
from teachflow.schemas.classroom import AssignmentSubmit, SubmitResult

router = APIRouter()


@router.post("/assignments/submit", response_model=SubmitResult, dependencies=AUTHENTICATED)
def submit_assignment(payload: AssignmentSubmit, db: Database = Depends(get_db)):
    classes = db[collections.CLASSES]
    path = f"assignments.{payload.assignment_index}"

    submission = AssignmentSubmission(
        student_email=payload.student_email,
        student_name=payload.student_name,
        submission_text=payload.submission_text,
        submitted_at=datetime.now(timezone.utc),
    )

    with store_errors("Failed to submit assignment"):
        classroom = classes.find_one({"classId": payload.class_id}, {"assignments": 1})
        if not classroom or payload.assignment_index >= len(classroom.get("assignments") or []):
            raise NotFound("Assignment not found")

        result = classes.update_one(
            {"classId": payload.class_id},
            {
                "$push": {f"{path}.submissions": submission.to_document()},
                "$inc": {f"{path}.submissionCount": 1, "totalSubmissions": 1},
            },
        )

    if result.modified_count == 0:
        raise NotFound("Assignment not found")
    return SubmitResult(success=True)
