"""
Activity ORM model.

Represents a single activity (usually a question) inside a lesson.
The body_data column holds the kind-specific payload as JSON.

Dependencies: sqlalchemy, planner_mcp.boundary.db.base
System role: Activity persistence for the content catalog
"""

from sqlalchemy import Boolean, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planner_mcp.boundary.db.base import Base, SoftDeleteMixin, new_identifier


class ActivityModel(Base, SoftDeleteMixin):
    """
    Activity ORM model.

    body_data is validated against the activity's kind before insert
    (see planner_mcp.core.validation); it is stored and returned verbatim.

    Attributes:
        activity_id: Opaque text primary key
        lesson_id: Parent lesson
        title: Activity title
        type: Kind discriminator (multiple-choice-question, short-text-question, text, ...)
        body_data: Kind-specific JSON payload
        order_by: Optional position within the lesson
        is_summative: Whether the activity counts towards assessment
        notes: Optional teacher notes
        active: Soft-delete flag

    Relationships:
        lesson: Many-to-one with LessonModel
    """

    __tablename__ = "activities"

    activity_id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_identifier,
    )

    lesson_id: Mapped[str] = mapped_column(
        ForeignKey("lessons.lesson_id"),
        nullable=False,
        index=True,
        doc="Parent lesson ID",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, doc="Activity title")

    type: Mapped[str] = mapped_column(String(64), nullable=False, doc="Activity kind")

    body_data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Kind-specific payload",
    )

    order_by: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        default=None,
        doc="Ordering key within the lesson",
    )

    is_summative: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Counts towards summative assessment",
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # Relationships
    lesson = relationship("LessonModel", back_populates="activities")
