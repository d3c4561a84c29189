"""
Catalog domain models and schemas.

Read models returned by the content store gateway and the input schema
for new activities.

Dependencies: pydantic
System role: Catalog data contracts shared by the gateway and the tools
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UnitRecord(BaseModel):
    """Curriculum unit as returned to tool callers."""

    model_config = ConfigDict(from_attributes=True)

    unit_id: str
    title: str
    subject: str
    description: str | None = None
    year: int | None = None
    active: bool | None = True


class LessonRecord(BaseModel):
    """Lesson as returned to tool callers."""

    model_config = ConfigDict(from_attributes=True)

    lesson_id: str
    unit_id: str
    title: str
    active: bool | None = True
    order_by: int = 0


class ActivityRecord(BaseModel):
    """Activity as returned to tool callers; body_data is passed through verbatim."""

    model_config = ConfigDict(from_attributes=True)

    activity_id: str
    lesson_id: str
    title: str
    type: str
    body_data: Any
    order_by: int | None = None
    active: bool | None = True
    is_summative: bool = False
    notes: str | None = None


class NewActivity(BaseModel):
    """Fields accepted when creating an activity."""

    lesson_id: str
    title: str
    type: str
    body_data: dict[str, Any]
    order_by: int | None = None
    is_summative: bool = False
    notes: str | None = None


class ActivityStats(BaseModel):
    """Activity counts for one lesson."""

    lesson_id: str
    total: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
