"""
CRUD operations for catalog models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from planner_mcp.boundary.db.CRUD import unit_crud, lesson_crud, activity_crud

    # Use singleton instances
    lessons = await lesson_crud.find_by_title(db, "photosynthesis")
"""

from planner_mcp.boundary.db.CRUD.base_crud import BaseCRUD
from planner_mcp.boundary.db.CRUD.unit_crud import UnitCRUD, unit_crud
from planner_mcp.boundary.db.CRUD.lesson_crud import LessonCRUD, lesson_crud
from planner_mcp.boundary.db.CRUD.activity_crud import ActivityCRUD, activity_crud

__all__ = [
    "BaseCRUD",
    "UnitCRUD",
    "unit_crud",
    "LessonCRUD",
    "lesson_crud",
    "ActivityCRUD",
    "activity_crud",
]
