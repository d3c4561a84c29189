"""
Unit ORM model.

Represents a curriculum unit, the top level of the catalog hierarchy.

Dependencies: sqlalchemy, planner_mcp.boundary.db.base
System role: Unit persistence for the content catalog
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner_mcp.boundary.db.base import Base, SoftDeleteMixin, new_identifier


class UnitModel(Base, SoftDeleteMixin):
    """
    Unit ORM model.

    Attributes:
        unit_id: Opaque text primary key
        title: Unit title
        subject: Subject the unit belongs to (e.g. "Science")
        description: Optional long description
        year: Optional school year the unit targets
        active: Soft-delete flag
        lessons: Lessons belonging to this unit

    Relationships:
        lessons: One-to-many with LessonModel
    """

    __tablename__ = "units"

    unit_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_identifier,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, doc="Unit title")

    subject: Mapped[str] = mapped_column(String(255), nullable=False, doc="Subject")

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        doc="Unit description",
    )

    year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        default=None,
        doc="Target school year",
    )

    # Relationships
    lessons = relationship("LessonModel", back_populates="unit")
