"""
Unit CRUD operations.

Dependencies: sqlalchemy, planner_mcp.boundary.db.models
System role: Unit persistence operations
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from planner_mcp.boundary.db.models.unit_model import UnitModel
from planner_mcp.boundary.db.CRUD.base_crud import BaseCRUD


class UnitCRUD(BaseCRUD[UnitModel]):
    """CRUD operations for UnitModel with subject/year filtering."""

    def __init__(self) -> None:
        """Initialize UnitCRUD with UnitModel."""
        super().__init__(UnitModel, "unit_id")

    async def get_filtered(
        self,
        session: AsyncSession,
        subject: str | None = None,
        year: int | None = None,
        active: bool | None = None,
    ) -> Sequence[UnitModel]:
        """
        List units, optionally filtered, ordered by subject then title.

        Args:
            session: Async database session
            subject: Exact subject to match
            year: Exact year to match
            active: Explicit active flag; None means active rows only

        Returns:
            Sequence of matching UnitModels
        """
        stmt = select(UnitModel)
        if subject:
            stmt = stmt.where(UnitModel.subject == subject)
        if year is not None:
            stmt = stmt.where(UnitModel.year == year)
        if active is not None:
            stmt = stmt.where(UnitModel.active == active)
        else:
            stmt = stmt.where(UnitModel.is_active())
        stmt = stmt.order_by(UnitModel.subject, UnitModel.title)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession) -> int:
        """Count all unit rows regardless of active flag."""
        result = await session.execute(select(func.count()).select_from(UnitModel))
        return result.scalar_one()


unit_crud = UnitCRUD()
