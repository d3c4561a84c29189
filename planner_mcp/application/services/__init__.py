"""Service orchestrators."""

from .activity_service import ActivityService, check_activity

__all__ = [
    "ActivityService",
    "check_activity",
]
