"""
Lesson ORM model.

Represents a lesson inside a unit. Lessons own the activities.

Dependencies: sqlalchemy, planner_mcp.boundary.db.base
System role: Lesson persistence for the content catalog
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner_mcp.boundary.db.base import Base, SoftDeleteMixin, new_identifier


class LessonModel(Base, SoftDeleteMixin):
    """
    Lesson ORM model.

    Attributes:
        lesson_id: Opaque text primary key
        unit_id: Parent unit
        title: Lesson title (searched case-insensitively by find_lesson)
        order_by: Position of the lesson within its unit
        active: Soft-delete flag

    Relationships:
        unit: Many-to-one with UnitModel
        activities: One-to-many with ActivityModel
    """

    __tablename__ = "lessons"

    lesson_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_identifier,
    )

    unit_id: Mapped[str] = mapped_column(
        ForeignKey("units.unit_id"),
        nullable=False,
        index=True,
        doc="Parent unit ID",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, doc="Lesson title")

    order_by: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Ordering key within the unit",
    )

    # Relationships
    unit = relationship("UnitModel", back_populates="lessons")
    activities = relationship("ActivityModel", back_populates="lesson")
