import logging

from fastapi import Depends, Request
from pymongo.database import Database
from pymongo.errors import PyMongoError

from teachflow.core.current_user import authenticate
from teachflow.core.deps import get_db
from teachflow.core.errors import Forbidden, InternalError
from teachflow.db import collections
from teachflow.models.user import Role

logger = logging.getLogger(__name__)


def require_role(role: Role):
    """
    Gate 2 factory. The returned dependency expects Gate 1 to have run already
    and looks the caller's role up by email; it never writes.
    """

    def _require_role(request: Request, db: Database = Depends(get_db)) -> dict:
        claim = getattr(request.state, "identity", None)
        if claim is None or not claim.email:
            raise Forbidden("Forbidden: No email in token")

        try:
            user = db[collections.USERS].find_one({"email": claim.email})
        except PyMongoError as exc:
            logger.exception("%s check failed", role.value)
            raise InternalError("Server error during role verification") from exc

        if not user or user.get("role") != role.value:
            logger.info("Denied %s-only access to %s", role.value, claim.email)
            raise Forbidden(f"Forbidden: {role.value} only")
        return user

    return _require_role


require_admin = require_role(Role.admin)
require_teacher = require_role(Role.teacher)

# ordered guard lists; FastAPI runs them in order and stops at the first raise
AUTHENTICATED = [Depends(authenticate)]
ADMIN_ONLY = [Depends(authenticate), Depends(require_admin)]
TEACHER_ONLY = [Depends(authenticate), Depends(require_teacher)]
