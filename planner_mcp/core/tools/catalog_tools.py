"""
Catalog tools.

Registers the five catalog operations on a ToolRegistry. Read tools call
the gateway directly; create_activity goes through the ActivityService so
that rejected payloads never reach the database.

Dependencies: planner_mcp.boundary.db, planner_mcp.application.services
System role: Tool definitions exposed to protocol clients
"""

import logging

from mcp.types import CallToolResult

from planner_mcp.application.services.activity_service import ActivityService
from planner_mcp.boundary.db.gateway import CatalogGateway
from planner_mcp.core.exceptions import ActivityValidationError, StorageError
from planner_mcp.core.tools.registry import ToolRegistry
from planner_mcp.core.tools.results import error_result, json_result
from planner_mcp.models.catalog import NewActivity
from planner_mcp.models.tool_args import (
    CreateActivityArgs,
    FindLessonArgs,
    ListActivitiesArgs,
    ListLessonsForUnitArgs,
    ListUnitsArgs,
)

logger = logging.getLogger(__name__)

STORAGE_FAILURE = "storage operation failed"


def build_tool_registry(gateway: CatalogGateway) -> ToolRegistry:
    """
    Create the registry holding every catalog tool.

    Args:
        gateway: Content store gateway shared by all sessions

    Returns:
        ToolRegistry: Registry with list_units, list_lessons_for_unit,
        find_lesson, create_activity and list_activities
    """
    registry = ToolRegistry()
    activity_service = ActivityService(gateway)

    @registry.tool(
        "list_units",
        "List all curriculum units, optionally filtered by subject and/or year",
        ListUnitsArgs,
    )
    async def list_units(args: ListUnitsArgs) -> CallToolResult:
        try:
            units = await gateway.list_units(subject=args.subject, year=args.year)
        except StorageError:
            return error_result(f"Error listing units: {STORAGE_FAILURE}")
        return json_result(units)

    @registry.tool(
        "list_lessons_for_unit",
        "List all lessons belonging to a specific unit",
        ListLessonsForUnitArgs,
    )
    async def list_lessons_for_unit(args: ListLessonsForUnitArgs) -> CallToolResult:
        try:
            lessons = await gateway.list_lessons(unit_id=args.unit_id)
        except StorageError:
            return error_result(f"Error listing lessons: {STORAGE_FAILURE}")
        return json_result(lessons)

    @registry.tool(
        "find_lesson",
        "Search for lessons by title (case-insensitive partial match), optionally scoped to a unit",
        FindLessonArgs,
    )
    async def find_lesson(args: FindLessonArgs) -> CallToolResult:
        try:
            lessons = await gateway.find_lessons_by_title(args.title, unit_id=args.unit_id)
        except StorageError:
            return error_result(f"Error finding lessons: {STORAGE_FAILURE}")
        return json_result(lessons)

    @registry.tool(
        "create_activity",
        "Create a new activity (question) for a lesson",
        CreateActivityArgs,
    )
    async def create_activity(args: CreateActivityArgs) -> CallToolResult:
        new_activity = NewActivity(
            lesson_id=args.lesson_id,
            title=args.title,
            type=args.type.value,
            body_data=args.body_data,
            order_by=args.order_by,
            is_summative=bool(args.is_summative),
            notes=args.notes,
        )
        try:
            activity = await activity_service.create_activity(new_activity)
        except ActivityValidationError as e:
            return error_result(e.message)
        except StorageError:
            return error_result(f"Error creating activity: {STORAGE_FAILURE}")
        return json_result(activity)

    @registry.tool(
        "list_activities",
        "List all active activities for a lesson",
        ListActivitiesArgs,
    )
    async def list_activities(args: ListActivitiesArgs) -> CallToolResult:
        try:
            activities = await gateway.list_activities(args.lesson_id)
        except StorageError:
            return error_result(f"Error listing activities: {STORAGE_FAILURE}")
        return json_result(activities)

    logger.debug("Catalog tools registered", extra={"tools": registry.names})
    return registry
