"""
Tool argument schemas.

One pydantic model per catalog tool. These models are the typed argument
contract published to clients through tools/list.

Dependencies: pydantic, planner_mcp.core.validation
System role: Tool API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from planner_mcp.core.validation.activity_kinds import ActivityKind


class ListUnitsArgs(BaseModel):
    """Arguments of list_units."""

    subject: str | None = Field(default=None, description="Only units of this subject")
    year: int | None = Field(default=None, description="Only units for this school year")


class ListLessonsForUnitArgs(BaseModel):
    """Arguments of list_lessons_for_unit."""

    unit_id: str = Field(description="Unit whose lessons to list")


class FindLessonArgs(BaseModel):
    """Arguments of find_lesson."""

    title: str = Field(description="Case-insensitive partial lesson title")
    unit_id: str | None = Field(default=None, description="Restrict the search to one unit")


class CreateActivityArgs(BaseModel):
    """Arguments of create_activity."""

    lesson_id: str = Field(description="Lesson the activity belongs to")
    title: str = Field(description="Activity title")
    type: ActivityKind = Field(description="Activity kind")
    body_data: dict[str, Any] = Field(description="Kind-specific payload")
    order_by: int | None = Field(default=None, description="Position within the lesson")
    is_summative: bool | None = Field(default=None, description="Counts towards assessment")
    notes: str | None = Field(default=None, description="Teacher notes")


class ListActivitiesArgs(BaseModel):
    """Arguments of list_activities."""

    lesson_id: str = Field(description="Lesson whose active activities to list")
