"""
Content store gateway.

Runs catalog reads and writes against the relational store, one transaction
per operation, and converts ORM rows into read models. Database failures are
logged here with their full context and re-raised as StorageError so callers
never see driver-level detail.

Dependencies: sqlalchemy, planner_mcp.boundary.db.CRUD, planner_mcp.models
System role: Single entry point to catalog persistence
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from planner_mcp.boundary.db.CRUD import activity_crud, lesson_crud, unit_crud
from planner_mcp.core.exceptions import StorageError
from planner_mcp.models.catalog import (
    ActivityRecord,
    ActivityStats,
    LessonRecord,
    NewActivity,
    UnitRecord,
)

logger = logging.getLogger(__name__)


class CatalogGateway:
    """Parameterized catalog lookups and inserts."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize gateway with a session factory.

        Args:
            session_factory: Factory producing AsyncSession instances
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception(
                    f"Storage operation failed: {operation}",
                    extra={"operation": operation, "error_type": type(e).__name__},
                )
                raise StorageError(
                    f"Storage operation failed: {operation}", operation=operation
                ) from e

    async def ping(self) -> bool:
        """
        Check that the database answers a trivial query.

        Returns:
            bool: True if reachable, False otherwise (never raises)
        """
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", extra={"error": str(e)})
            return False

    async def count_units(self) -> int:
        """Count rows in the units table (startup check)."""
        async with self._transaction("count_units") as session:
            return await unit_crud.count(session)

    async def list_units(
        self,
        subject: str | None = None,
        year: int | None = None,
        active: bool | None = None,
    ) -> list[UnitRecord]:
        """List units filtered by subject/year; active only unless stated."""
        async with self._transaction("list_units") as session:
            units = await unit_crud.get_filtered(
                session, subject=subject, year=year, active=active
            )
            return [UnitRecord.model_validate(unit) for unit in units]

    async def get_unit(self, unit_id: str) -> UnitRecord | None:
        async with self._transaction("get_unit") as session:
            unit = await unit_crud.get_by_id(session, unit_id)
            return UnitRecord.model_validate(unit) if unit else None

    async def list_lessons(
        self,
        unit_id: str | None = None,
        active: bool | None = None,
    ) -> list[LessonRecord]:
        """List lessons, optionally for one unit; active only unless stated."""
        async with self._transaction("list_lessons") as session:
            lessons = await lesson_crud.get_filtered(session, unit_id=unit_id, active=active)
            return [LessonRecord.model_validate(lesson) for lesson in lessons]

    async def get_lesson(self, lesson_id: str) -> LessonRecord | None:
        async with self._transaction("get_lesson") as session:
            lesson = await lesson_crud.get_by_id(session, lesson_id)
            return LessonRecord.model_validate(lesson) if lesson else None

    async def find_lessons_by_title(
        self,
        title: str,
        unit_id: str | None = None,
    ) -> list[LessonRecord]:
        """Case-insensitive partial title search over active lessons."""
        async with self._transaction("find_lessons_by_title") as session:
            lessons = await lesson_crud.find_by_title(session, title, unit_id=unit_id)
            return [LessonRecord.model_validate(lesson) for lesson in lessons]

    async def list_activities(self, lesson_id: str) -> list[ActivityRecord]:
        """List active activities of a lesson in display order."""
        async with self._transaction("list_activities") as session:
            activities = await activity_crud.get_by_lesson_id(session, lesson_id)
            return [ActivityRecord.model_validate(activity) for activity in activities]

    async def get_activity(self, activity_id: str) -> ActivityRecord | None:
        async with self._transaction("get_activity") as session:
            activity = await activity_crud.get_by_id(session, activity_id)
            return ActivityRecord.model_validate(activity) if activity else None

    async def create_activity(self, new_activity: NewActivity) -> ActivityRecord:
        """
        Insert one activity. The payload must already be validated.

        Args:
            new_activity: Fields of the activity to insert

        Returns:
            ActivityRecord: The stored row, active=True

        Raises:
            StorageError: If the insert fails (unknown lesson, connectivity, ...)
        """
        async with self._transaction("create_activity") as session:
            activity = await activity_crud.create(
                session, **new_activity.model_dump(), active=True
            )
            return ActivityRecord.model_validate(activity)

    async def bulk_create_activities(
        self,
        lesson_id: str,
        new_activities: list[NewActivity],
    ) -> list[ActivityRecord]:
        """
        Insert several activities into one lesson in a single transaction.

        The lesson_id argument overrides whatever each item carries. Either
        every row is stored or none is.
        """
        async with self._transaction("bulk_create_activities") as session:
            created = []
            for new_activity in new_activities:
                fields = new_activity.model_dump()
                fields["lesson_id"] = lesson_id
                activity = await activity_crud.create(session, **fields, active=True)
                created.append(ActivityRecord.model_validate(activity))
            return created

    async def update_activity(
        self,
        activity_id: str,
        changes: dict[str, Any],
    ) -> ActivityRecord | None:
        """
        Replace the given activity fields; omitted fields keep their values.

        Returns:
            ActivityRecord | None: Updated row, or None if the id is unknown
        """
        async with self._transaction("update_activity") as session:
            if not changes:
                activity = await activity_crud.get_by_id(session, activity_id)
            else:
                activity = await activity_crud.update_by_id(session, activity_id, **changes)
            return ActivityRecord.model_validate(activity) if activity else None

    async def delete_activity(self, activity_id: str) -> bool:
        """Soft-delete an activity; True if a row was changed."""
        async with self._transaction("delete_activity") as session:
            return await activity_crud.soft_delete_by_id(session, activity_id)

    async def activity_stats(self, lesson_id: str) -> ActivityStats:
        """Total active activities of a lesson and their count per kind."""
        async with self._transaction("activity_stats") as session:
            by_type = await activity_crud.count_by_type(session, lesson_id)
            return ActivityStats(
                lesson_id=lesson_id,
                total=sum(by_type.values()),
                by_type=by_type,
            )
