"""
Database boundary layer: ORM models, CRUD operations, connection management
and the catalog gateway.

Exports:
  - Base, SoftDeleteMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - UnitModel, LessonModel, ActivityModel: Catalog entities
  - unit_crud, lesson_crud, activity_crud: CRUD operation singletons
  - CatalogGateway: Transactional catalog operations used by the tools

Dependencies: sqlalchemy, planner_mcp.configs
System role: Database adapter for the curriculum catalog
"""

from planner_mcp.boundary.db.base import Base, SoftDeleteMixin, new_identifier
from planner_mcp.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)
from planner_mcp.boundary.db.models import ActivityModel, LessonModel, UnitModel
from planner_mcp.boundary.db.CRUD import (
    BaseCRUD,
    UnitCRUD,
    LessonCRUD,
    ActivityCRUD,
    unit_crud,
    lesson_crud,
    activity_crud,
)
from planner_mcp.boundary.db.gateway import CatalogGateway

__all__ = [
    # Base classes
    "Base",
    "SoftDeleteMixin",
    "new_identifier",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UnitModel",
    "LessonModel",
    "ActivityModel",
    # CRUD classes
    "BaseCRUD",
    "UnitCRUD",
    "LessonCRUD",
    "ActivityCRUD",
    # CRUD singletons
    "unit_crud",
    "lesson_crud",
    "activity_crud",
    # Gateway
    "CatalogGateway",
]
