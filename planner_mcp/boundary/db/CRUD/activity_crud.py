"""
Activity CRUD operations.

Provides per-lesson listing and statistics for ActivityModel. Payload
validation happens before these methods are called; this layer stores
body_data as given.

Dependencies: sqlalchemy, planner_mcp.boundary.db.models
System role: Activity persistence operations
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from planner_mcp.boundary.db.models.activity_model import ActivityModel
from planner_mcp.boundary.db.CRUD.base_crud import BaseCRUD


class ActivityCRUD(BaseCRUD[ActivityModel]):
    """CRUD operations for ActivityModel."""

    def __init__(self) -> None:
        """Initialize ActivityCRUD with ActivityModel."""
        super().__init__(ActivityModel, "activity_id")

    async def get_by_lesson_id(
        self,
        session: AsyncSession,
        lesson_id: str,
    ) -> Sequence[ActivityModel]:
        """
        List active activities of a lesson in display order.

        Args:
            session: Async database session
            lesson_id: Parent lesson ID

        Returns:
            Sequence of ActivityModels ordered by order_by then activity_id
        """
        stmt = (
            select(ActivityModel)
            .where(ActivityModel.lesson_id == lesson_id)
            .where(ActivityModel.is_active())
            .order_by(ActivityModel.order_by, ActivityModel.activity_id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_type(
        self,
        session: AsyncSession,
        lesson_id: str,
    ) -> dict[str, int]:
        """
        Count active activities of a lesson grouped by kind.

        Args:
            session: Async database session
            lesson_id: Parent lesson ID

        Returns:
            dict mapping activity type to count
        """
        stmt = (
            select(ActivityModel.type, func.count())
            .where(ActivityModel.lesson_id == lesson_id)
            .where(ActivityModel.is_active())
            .group_by(ActivityModel.type)
        )
        result = await session.execute(stmt)
        return {activity_type: count for activity_type, count in result.all()}


activity_crud = ActivityCRUD()
