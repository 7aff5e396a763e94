import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from teachflow.core.config import POPULAR_CLASSES_LIMIT
from teachflow.core.deps import get_db
from teachflow.core.errors import NotFound, ValidationError
from teachflow.core.permissions import ADMIN_ONLY, AUTHENTICATED, TEACHER_ONLY
from teachflow.db import collections
from teachflow.db.serialize import oid, serialize_doc, serialize_list
from teachflow.db.session import store_errors
from teachflow.models.classroom import Assignment, Classroom
from teachflow.models.review_status import ReviewStatus
from teachflow.schemas.classroom import AssignmentCreate, ClassCreate, ClassCreated, ClassUpdate
from teachflow.schemas.results import DeleteResult, UpdateResult
from teachflow.schemas.teacher_application import StatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _enrollment_count_pipeline(count_field: str, sort: bool = False, limit: int | None = None) -> list[dict]:
    """
    Approved classes joined to enrollments on classId, with the match count in
    `count_field`. The join runs inside Mongo; the joined array is dropped.
    """
    pipeline: list[dict] = [
        {"$match": {"status": ReviewStatus.approved.value}},
        {
            "$lookup": {
                "from": collections.ENROLLMENTS,
                "localField": "classId",
                "foreignField": "classId",
                "as": "enrollments",
            }
        },
        {"$addFields": {count_field: {"$size": "$enrollments"}}},
    ]
    if sort:
        pipeline.append({"$sort": {count_field: -1}})
    if limit is not None:
        pipeline.append({"$limit": limit})
    pipeline.append({"$project": {"enrollments": 0}})
    return pipeline


def _update_result(result) -> UpdateResult:
    if result.matched_count == 0:
        raise NotFound("Class not found")
    return UpdateResult(matched_count=result.matched_count, modified_count=result.modified_count)


@router.get("/classes/teacher", dependencies=TEACHER_ONLY)
def list_teacher_classes(email: str | None = Query(None), db: Database = Depends(get_db)):
    if not email:
        raise ValidationError("Email query is required")
    with store_errors("Failed to fetch classes"):
        return serialize_list(list(db[collections.CLASSES].find({"teacherEmail": email})))


@router.get("/classes/by-classId/{class_id}", dependencies=AUTHENTICATED)
def get_class_by_class_id(class_id: str, db: Database = Depends(get_db)):
    with store_errors("Failed to fetch class"):
        doc = db[collections.CLASSES].find_one({"classId": class_id})
    if not doc:
        raise NotFound("Class not found")
    return serialize_doc(doc)


@router.get("/classes/{doc_id}", dependencies=AUTHENTICATED)
def get_class(doc_id: str, db: Database = Depends(get_db)):
    _id = oid(doc_id)
    with store_errors("Failed to fetch class"):
        doc = db[collections.CLASSES].find_one({"_id": _id})
    if not doc:
        raise NotFound("Class not found")
    return serialize_doc(doc)


@router.get("/classes", dependencies=ADMIN_ONLY)
def list_classes(db: Database = Depends(get_db)):
    with store_errors("Failed to fetch classes"):
        return serialize_list(list(db[collections.CLASSES].find()))


@router.get("/approved-classes")
def approved_classes(db: Database = Depends(get_db)):
    with store_errors("Failed to fetch approved classes"):
        docs = db[collections.CLASSES].aggregate(_enrollment_count_pipeline("totalEnrollment"))
        return serialize_list(list(docs))


@router.get("/popular-classes")
def popular_classes(db: Database = Depends(get_db)):
    pipeline = _enrollment_count_pipeline("enrolledCount", sort=True, limit=POPULAR_CLASSES_LIMIT)
    with store_errors("Failed to fetch popular classes"):
        return serialize_list(list(db[collections.CLASSES].aggregate(pipeline)))


@router.post(
    "/classes",
    response_model=ClassCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=TEACHER_ONLY,
)
def create_class(payload: ClassCreate, db: Database = Depends(get_db)):
    classroom = Classroom(
        class_id=payload.class_id or uuid.uuid4().hex,
        teacher_email=payload.teacher_email,
        teacher_name=payload.teacher_name,
        title=payload.title,
        price=payload.price,
        description=payload.description,
        image=payload.image,
        status=ReviewStatus.pending,
        created_at=datetime.now(timezone.utc),
    )

    with store_errors("Failed to create class"):
        result = db[collections.CLASSES].insert_one(classroom.to_document())

    logger.info("Class %s submitted by %s", classroom.class_id, classroom.teacher_email)
    return ClassCreated(inserted_id=str(result.inserted_id), class_id=classroom.class_id)


@router.patch("/update-class/{doc_id}", response_model=UpdateResult, dependencies=TEACHER_ONLY)
def update_class(doc_id: str, payload: ClassUpdate, db: Database = Depends(get_db)):
    _id = oid(doc_id)
    changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("Nothing to update")

    with store_errors("Failed to update class"):
        result = db[collections.CLASSES].update_one({"_id": _id}, {"$set": changes})
    return _update_result(result)


@router.patch("/classes/update-status/{doc_id}", response_model=UpdateResult, dependencies=ADMIN_ONLY)
def set_class_status(doc_id: str, payload: StatusUpdate, db: Database = Depends(get_db)):
    _id = oid(doc_id)
    with store_errors("Failed to update class status"):
        result = db[collections.CLASSES].update_one(
            {"_id": _id},
            {"$set": {"status": payload.status.value}},
        )
    return _update_result(result)


@router.patch("/classes/add-assignment/{doc_id}", response_model=UpdateResult, dependencies=TEACHER_ONLY)
def add_assignment(doc_id: str, payload: AssignmentCreate, db: Database = Depends(get_db)):
    _id = oid(doc_id)
    assignment = Assignment(
        title=payload.title,
        content=payload.content,
        deadline=payload.deadline,
        created_at=datetime.now(timezone.utc),
    )

    with store_errors("Failed to add assignment"):
        result = db[collections.CLASSES].update_one(
            {"_id": _id},
            {"$push": {"assignments": assignment.to_document()}},
        )
    return _update_result(result)


@router.delete("/classes/{doc_id}", response_model=DeleteResult, dependencies=TEACHER_ONLY)
def delete_class(doc_id: str, db: Database = Depends(get_db)):
    _id = oid(doc_id)
    with store_errors("Failed to delete class"):
        result = db[collections.CLASSES].delete_one({"_id": _id})
    if result.deleted_count == 0:
        raise NotFound("Class not found")
    return DeleteResult(deleted_count=result.deleted_count)
