"""
Database models package.

Exports:
  - UnitModel: Curriculum unit ORM model
  - LessonModel: Lesson ORM model
  - ActivityModel: Activity ORM model

Dependencies: sqlalchemy, planner_mcp.boundary.db.base
System role: Database model definitions for the content catalog
"""

from planner_mcp.boundary.db.models.unit_model import UnitModel
from planner_mcp.boundary.db.models.lesson_model import LessonModel
from planner_mcp.boundary.db.models.activity_model import ActivityModel

__all__ = [
    "UnitModel",
    "LessonModel",
    "ActivityModel",
]
