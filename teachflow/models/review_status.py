from enum import Enum


class ReviewStatus(str, Enum):
    """Admin-controlled status shared by teacher applications and classes."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"
