from fastapi import APIRouter, Depends
from pymongo.database import Database

from teachflow.core.deps import get_db
from teachflow.db import collections
from teachflow.db.session import store_errors
from teachflow.schemas.stats import WebsiteStats

router = APIRouter(tags=["stats"])


@router.get("/website-stats", response_model=WebsiteStats)
def website_stats(db: Database = Depends(get_db)):
    with store_errors("Failed to fetch stats"):
        return WebsiteStats(
            total_users=db[collections.USERS].estimated_document_count(),
            total_classes=db[collections.CLASSES].estimated_document_count(),
            total_enrollments=db[collections.ENROLLMENTS].estimated_document_count(),
        )
