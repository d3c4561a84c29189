"""
Lesson CRUD operations.

Provides lesson listing per unit and case-insensitive title search.

Dependencies: sqlalchemy, planner_mcp.boundary.db.models
System role: Lesson persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from planner_mcp.boundary.db.models.lesson_model import LessonModel
from planner_mcp.boundary.db.CRUD.base_crud import BaseCRUD


class LessonCRUD(BaseCRUD[LessonModel]):
    """CRUD operations for LessonModel."""

    def __init__(self) -> None:
        """Initialize LessonCRUD with LessonModel."""
        super().__init__(LessonModel, "lesson_id")

    async def get_filtered(
        self,
        session: AsyncSession,
        unit_id: str | None = None,
        active: bool | None = None,
    ) -> Sequence[LessonModel]:
        """
        List lessons ordered by unit, position and title.

        Args:
            session: Async database session
            unit_id: Restrict to one unit
            active: Explicit active flag; None means active rows only

        Returns:
            Sequence of matching LessonModels
        """
        stmt = select(LessonModel)
        if unit_id:
            stmt = stmt.where(LessonModel.unit_id == unit_id)
        if active is not None:
            stmt = stmt.where(LessonModel.active == active)
        else:
            stmt = stmt.where(LessonModel.is_active())
        stmt = stmt.order_by(LessonModel.unit_id, LessonModel.order_by, LessonModel.title)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def find_by_title(
        self,
        session: AsyncSession,
        title: str,
        unit_id: str | None = None,
    ) -> Sequence[LessonModel]:
        """
        Search active lessons whose title contains the given text.

        Matching is case-insensitive; % and _ in the search text are
        matched literally.

        Args:
            session: Async database session
            title: Text to look for in lesson titles
            unit_id: Restrict the search to one unit

        Returns:
            Sequence of matching LessonModels ordered by position and title
        """
        stmt = select(LessonModel).where(
            LessonModel.title.icontains(title, autoescape=True)
        )
        if unit_id:
            stmt = stmt.where(LessonModel.unit_id == unit_id)
        stmt = stmt.where(LessonModel.is_active()).order_by(
            LessonModel.order_by, LessonModel.title
        )
        result = await session.execute(stmt)
        return result.scalars().all()


lesson_crud = LessonCRUD()
