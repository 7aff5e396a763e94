from teachflow.schemas.base import ApiModel


class WebsiteStats(ApiModel):
    total_users: int
    total_classes: int
    total_enrollments: int
