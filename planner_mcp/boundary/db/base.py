"""
SQLAlchemy declarative base and common mixins.

Provides base class for all catalog ORM models and the soft-delete
mixin shared by units, lessons and activities.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid

from sqlalchemy import Boolean, ColumnElement, or_, true
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_identifier() -> str:
    """Generate an opaque text primary key for new catalog rows."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class SoftDeleteMixin:
    """
    Mixin providing the soft-delete flag to catalog models.

    Rows are never removed physically; deleting flips active to False.
    Legacy rows may carry NULL, which is treated as active.

    Attributes:
        active: Soft-delete flag (True = visible)
    """

    active: Mapped[bool | None] = mapped_column(
        Boolean,
        nullable=True,
        default=True,
    )

    @classmethod
    def is_active(cls) -> ColumnElement[bool]:
        """SQL condition equivalent to COALESCE(active, true) = true."""
        return or_(cls.active.is_(None), cls.active == true())
