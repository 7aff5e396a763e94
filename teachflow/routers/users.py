import logging
import re
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo import ReturnDocument
from pymongo.database import Database

from teachflow.core.current_user import authenticate
from teachflow.core.deps import get_db
from teachflow.core.errors import NotFound, ValidationError
from teachflow.core.identity import IdentityClaim
from teachflow.core.permissions import ADMIN_ONLY, AUTHENTICATED
from teachflow.db import collections
from teachflow.db.serialize import oid, serialize_doc
from teachflow.db.session import store_errors
from teachflow.models.user import Role, User
from teachflow.schemas.results import InsertResult, MessageResult
from teachflow.schemas.user import RoleRead, RoleUpdate, UserUpsert

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/users",
    status_code=status.HTTP_200_OK,
    responses={
        201: {"model": InsertResult, "description": "User created"},
        200: {"description": "User already existed; lastLogin refreshed"},
    },
)
def upsert_user(payload: UserUpsert, response: Response, db: Database = Depends(get_db)):
    """Record a user on login: insert on first contact, otherwise refresh lastLogin."""
    now = datetime.now(timezone.utc)
    users = db[collections.USERS]

    user = User(
        email=payload.email,
        name=payload.name,
        photo_url=payload.photo_url,
        role=payload.role,
        created_at=payload.created_at or now,
        last_login=payload.last_login or now,
    )
    fields = user.to_document()
    last_login = fields.pop("lastLogin")
    # elevated roles come from admins or an approved application, never from sign-up
    may_insert = payload.role in (None, Role.student)

    with store_errors("Server error"):
        # one atomic write, so concurrent first logins cannot both insert
        existing = users.find_one_and_update(
            {"email": payload.email},
            {"$set": {"lastLogin": last_login}, "$setOnInsert": fields},
            upsert=may_insert,
            return_document=ReturnDocument.BEFORE,
        )
        if existing is None and may_insert:
            created = users.find_one({"email": payload.email}, {"_id": 1})

    if existing is not None:
        return serialize_doc(existing)
    if not may_insert:
        raise ValidationError("Only the student role can be chosen at sign-up")

    logger.info("User %s created", payload.email)
    response.status_code = status.HTTP_201_CREATED
    return InsertResult(inserted_id=str(created["_id"]))


@router.get("/users/search", dependencies=AUTHENTICATED)
def search_user(email: str | None = Query(None), db: Database = Depends(get_db)):
    if not email:
        raise ValidationError("Email query is required")

    with store_errors("Failed to search user"):
        user = db[collections.USERS].find_one(
            {"email": {"$regex": re.escape(email), "$options": "i"}}
        )

    if not user:
        raise NotFound("User not found")
    return serialize_doc(user)


@router.get("/users/role", response_model=RoleRead, dependencies=AUTHENTICATED)
def get_user_role(email: str | None = Query(None), db: Database = Depends(get_db)):
    if not email:
        raise ValidationError("Email is required")

    with store_errors("Failed to fetch role"):
        user = db[collections.USERS].find_one({"email": email}, {"role": 1})

    if not user:
        raise NotFound("User not found")
    return RoleRead(role=user.get("role"))


@router.patch("/users/role/self", response_model=MessageResult)
def switch_to_student(
    payload: RoleUpdate,
    db: Database = Depends(get_db),
    me: IdentityClaim = Depends(authenticate),
):
    # self-service may only step down to student
    if payload.role != Role.student:
        raise ValidationError("Invalid role")

    with store_errors("Role update failed"):
        result = db[collections.USERS].update_one(
            {"email": me.email},
            {"$set": {"role": Role.student.value}},
        )

    if result.modified_count == 0:
        raise NotFound("User not found or role unchanged")
    return MessageResult(message="Role updated to student", modified_count=result.modified_count)


@router.patch("/users/{user_id}", response_model=MessageResult, dependencies=ADMIN_ONLY)
def set_user_role(user_id: str, payload: RoleUpdate, db: Database = Depends(get_db)):
    _id = oid(user_id)

    with store_errors("Failed to update role"):
        result = db[collections.USERS].update_one(
            {"_id": _id},
            {"$set": {"role": payload.role.value}},
        )

    if result.modified_count == 0:
        raise NotFound("User not found or role unchanged")

    logger.info("User %s role set to %s", user_id, payload.role.value)
    return MessageResult(
        message=f"User role updated to {payload.role.value}",
        modified_count=result.modified_count,
    )
