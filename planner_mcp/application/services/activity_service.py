"""
Activity service orchestrator.

Coordinates activity writes: enforces the record-level summative rule,
runs the payload through the validation engine and only then hands the
activity to the content store gateway.

Dependencies: planner_mcp.boundary.db, planner_mcp.core.validation
System role: Activity write use case orchestration
"""

import logging
from typing import Any

from planner_mcp.boundary.db.gateway import CatalogGateway
from planner_mcp.core.exceptions import ActivityValidationError
from planner_mcp.core.validation import ActivityKind, validate
from planner_mcp.models.catalog import ActivityRecord, NewActivity

logger = logging.getLogger(__name__)

NON_SCORABLE_MESSAGE = "text activities are non-scorable and cannot be summative"


def check_activity(kind: str, body_data: Any, is_summative: bool | None) -> None:
    """
    Apply every pre-persistence rule for one activity.

    Args:
        kind: Declared activity kind
        body_data: Kind-specific payload
        is_summative: Summative flag of the activity record

    Raises:
        ActivityValidationError: With the exact user-facing reason
    """
    activity_kind = ActivityKind.parse(kind)
    if is_summative and activity_kind is not None and not activity_kind.is_scorable:
        raise ActivityValidationError(NON_SCORABLE_MESSAGE, kind=kind)

    result = validate(kind, body_data)
    if not result.accepted:
        raise ActivityValidationError(result.reason, kind=kind)


class ActivityService:
    """Activity service orchestrator."""

    def __init__(self, gateway: CatalogGateway) -> None:
        """
        Initialize activity service with the content store gateway.

        Args:
            gateway: Catalog gateway used for persistence
        """
        self.gateway = gateway

    async def create_activity(self, new_activity: NewActivity) -> ActivityRecord:
        """
        Validate and store a new activity.

        Args:
            new_activity: Activity fields as supplied by the caller

        Returns:
            ActivityRecord: Stored activity (active=True)

        Raises:
            ActivityValidationError: If a rule rejects the activity (nothing stored)
            StorageError: If the insert fails
        """
        try:
            check_activity(new_activity.type, new_activity.body_data, new_activity.is_summative)
        except ActivityValidationError as e:
            logger.info(
                "Activity rejected",
                extra={"lesson_id": new_activity.lesson_id, "kind": new_activity.type, "reason": e.message},
            )
            raise

        activity = await self.gateway.create_activity(new_activity)
        logger.info(
            "Activity created",
            extra={"activity_id": activity.activity_id, "lesson_id": activity.lesson_id, "kind": activity.type},
        )
        return activity

    async def bulk_create_activities(
        self,
        lesson_id: str,
        new_activities: list[NewActivity],
    ) -> list[ActivityRecord]:
        """
        Validate every activity first, then store them all in one transaction.

        Raises:
            ActivityValidationError: Naming the position of the first rejected item
        """
        for index, new_activity in enumerate(new_activities):
            try:
                check_activity(new_activity.type, new_activity.body_data, new_activity.is_summative)
            except ActivityValidationError as e:
                raise ActivityValidationError(
                    f"Activity {index}: {e.message}", kind=new_activity.type
                ) from e

        created = await self.gateway.bulk_create_activities(lesson_id, new_activities)
        logger.info(
            "Activities created",
            extra={"lesson_id": lesson_id, "count": len(created)},
        )
        return created

    async def update_activity(
        self,
        activity_id: str,
        changes: dict[str, Any],
    ) -> ActivityRecord | None:
        """
        Apply a partial update.

        When the kind, payload or summative flag changes, the merged record is
        checked again before anything is written.

        Returns:
            ActivityRecord | None: Updated activity, None if the id is unknown
        """
        if {"type", "body_data", "is_summative"} & changes.keys():
            current = await self.gateway.get_activity(activity_id)
            if current is None:
                return None
            check_activity(
                changes.get("type", current.type),
                changes.get("body_data", current.body_data),
                changes.get("is_summative", current.is_summative),
            )
        return await self.gateway.update_activity(activity_id, changes)

    async def delete_activity(self, activity_id: str) -> bool:
        """Soft-delete an activity."""
        deleted = await self.gateway.delete_activity(activity_id)
        if deleted:
            logger.info("Activity deactivated", extra={"activity_id": activity_id})
        return deleted
