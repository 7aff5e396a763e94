import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from teachflow.core.deps import get_db
from teachflow.core.errors import Conflict, NotFound
from teachflow.core.permissions import ADMIN_ONLY
from teachflow.db import collections
from teachflow.db.serialize import oid, serialize_doc, serialize_list
from teachflow.db.session import store_errors
from teachflow.models.review_status import ReviewStatus
from teachflow.models.teacher_application import TeacherApplication
from teachflow.models.user import Role
from teachflow.schemas.results import InsertResult, UpdateResult
from teachflow.schemas.teacher_application import StatusUpdate, TeacherApplicationCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/teacher-requests", dependencies=ADMIN_ONLY)
def list_teacher_requests(db: Database = Depends(get_db)):
    with store_errors("Failed to fetch teacher requests"):
        return serialize_list(list(db[collections.TEACHER_APPLICATIONS].find()))


@router.get("/teacher-request/{email}")
def get_teacher_request(email: str, db: Database = Depends(get_db)):
    with store_errors("Failed to fetch teacher request"):
        application = db[collections.TEACHER_APPLICATIONS].find_one({"email": email})
    return serialize_doc(application) if application else {}


@router.post(
    "/teacher-request",
    response_model=InsertResult,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "An application already exists for this email"}},
)
def submit_teacher_request(payload: TeacherApplicationCreate, db: Database = Depends(get_db)):
    applications = db[collections.TEACHER_APPLICATIONS]

    with store_errors("Failed to submit teacher request"):
        if applications.find_one({"email": payload.email}):
            raise Conflict("You already applied.")

        profile = {
            k: v
            for k, v in payload.model_dump().items()
            if k not in ("status", "createdAt", "created_at", "_id")
        }
        application = TeacherApplication(
            **profile,
            status=ReviewStatus.pending,
            created_at=datetime.now(timezone.utc),
        )
        result = applications.insert_one(application.to_document())

    return InsertResult(inserted_id=str(result.inserted_id))


@router.patch("/teacher-request/{email}", response_model=UpdateResult)
def reapply_teacher_request(email: str, db: Database = Depends(get_db)):
    """Re-application after a decision puts the request back in the queue."""
    with store_errors("Failed to re-apply"):
        result = db[collections.TEACHER_APPLICATIONS].update_one(
            {"email": email},
            {"$set": {"status": ReviewStatus.pending.value}},
        )

    if result.matched_count == 0:
        raise NotFound("Application not found")
    return UpdateResult(matched_count=result.matched_count, modified_count=result.modified_count)


@router.patch("/update-status/{application_id}", response_model=UpdateResult, dependencies=ADMIN_ONLY)
def set_teacher_request_status(
    application_id: str,
    payload: StatusUpdate,
    db: Database = Depends(get_db),
):
    _id = oid(application_id)
    applications = db[collections.TEACHER_APPLICATIONS]

    with store_errors("Failed to update application status"):
        application = applications.find_one({"_id": _id})
        if not application:
            raise NotFound("Application not found")

        result = applications.update_one({"_id": _id}, {"$set": {"status": payload.status.value}})

        # approval promotes the applicant
        if payload.status == ReviewStatus.approved:
            db[collections.USERS].update_one(
                {"email": application["email"]},
                {"$set": {"role": Role.teacher.value}},
            )
            logger.info("Promoted %s to teacher", application["email"])

    return UpdateResult(matched_count=result.matched_count, modified_count=result.modified_count)
