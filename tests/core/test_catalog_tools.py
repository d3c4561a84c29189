"""
Test suite for the five catalog tools over a seeded SQLite catalog.

System role: Verification of tool behaviour seen by protocol clients
"""

import json
from unittest.mock import AsyncMock

import pytest
from mcp.types import INVALID_PARAMS

from planner_mcp.boundary.db.gateway import CatalogGateway
from planner_mcp.core.exceptions import ProtocolError, StorageError
from planner_mcp.core.tools import ToolRegistry, build_tool_registry
from tests.helpers import INTRO_ACTIVITY_ID, LESSON_ID, OTHER_UNIT_ID, UNIT_ID, VALID_MCQ_BODY


@pytest.fixture
def tools(gateway: CatalogGateway) -> ToolRegistry:
    return build_tool_registry(gateway)


def _payload(result):
    assert result.isError is False, result.content[0].text
    return json.loads(result.content[0].text)


class TestCatalogToolList:
    """Test suite for the registered tool set."""

    @pytest.mark.asyncio
    async def test_exactly_the_catalog_tools_are_registered(self, tools: ToolRegistry) -> None:
        assert tools.names == [
            "list_units",
            "list_lessons_for_unit",
            "find_lesson",
            "create_activity",
            "list_activities",
        ]

    @pytest.mark.asyncio
    async def test_create_activity_schema_lists_required_arguments(self, tools: ToolRegistry) -> None:
        schema = next(t for t in tools.list_tools() if t.name == "create_activity").inputSchema

        assert set(schema["required"]) == {"lesson_id", "title", "type", "body_data"}


class TestReadTools:
    """Test suite for list_units, list_lessons_for_unit, find_lesson, list_activities."""

    @pytest.mark.asyncio
    async def test_list_units_with_filters(self, tools: ToolRegistry) -> None:
        units = _payload(await tools.call("list_units", {"subject": "Biology"}))

        assert [unit["unit_id"] for unit in units] == [OTHER_UNIT_ID]

    @pytest.mark.asyncio
    async def test_list_units_without_arguments(self, tools: ToolRegistry) -> None:
        units = _payload(await tools.call("list_units", None))

        assert {unit["unit_id"] for unit in units} == {UNIT_ID, OTHER_UNIT_ID}

    @pytest.mark.asyncio
    async def test_list_lessons_for_unit(self, tools: ToolRegistry) -> None:
        lessons = _payload(await tools.call("list_lessons_for_unit", {"unit_id": UNIT_ID}))

        assert all(lesson["unit_id"] == UNIT_ID for lesson in lessons)
        assert len(lessons) == 2

    @pytest.mark.asyncio
    async def test_find_lesson(self, tools: ToolRegistry) -> None:
        lessons = _payload(await tools.call("find_lesson", {"title": "adding"}))

        assert [lesson["lesson_id"] for lesson in lessons] == [LESSON_ID]

    @pytest.mark.asyncio
    async def test_list_activities(self, tools: ToolRegistry) -> None:
        activities = _payload(await tools.call("list_activities", {"lesson_id": LESSON_ID}))

        assert [activity["activity_id"] for activity in activities] == [INTRO_ACTIVITY_ID]

    @pytest.mark.asyncio
    async def test_missing_required_argument_is_invalid_params(self, tools: ToolRegistry) -> None:
        with pytest.raises(ProtocolError) as exc_info:
            await tools.call("list_lessons_for_unit", {})

        assert exc_info.value.code == INVALID_PARAMS


class TestCreateActivityTool:
    """Test suite for create_activity."""

    @pytest.mark.asyncio
    async def test_valid_mcq_is_created_and_listed(self, tools: ToolRegistry) -> None:
        # Act
        created = _payload(
            await tools.call(
                "create_activity",
                {
                    "lesson_id": LESSON_ID,
                    "title": "Quick check",
                    "type": "multiple-choice-question",
                    "body_data": VALID_MCQ_BODY,
                    "order_by": 2,
                },
            )
        )
        listed = _payload(await tools.call("list_activities", {"lesson_id": LESSON_ID}))

        # Assert
        assert created["active"] is True
        assert created["is_summative"] is False
        assert created["activity_id"] in [activity["activity_id"] for activity in listed]

    @pytest.mark.asyncio
    async def test_summative_text_is_rejected_and_not_stored(self, tools: ToolRegistry) -> None:
        # Act
        result = await tools.call(
            "create_activity",
            {
                "lesson_id": LESSON_ID,
                "title": "Reading",
                "type": "text",
                "body_data": {"text": "answer"},
                "is_summative": True,
            },
        )

        # Assert
        assert result.isError is True
        assert result.content[0].text == "text activities are non-scorable and cannot be summative"
        listed = _payload(await tools.call("list_activities", {"lesson_id": LESSON_ID}))
        assert len(listed) == 1

    @pytest.mark.asyncio
    async def test_invalid_payload_reason_is_returned_verbatim(self, tools: ToolRegistry) -> None:
        result = await tools.call(
            "create_activity",
            {
                "lesson_id": LESSON_ID,
                "title": "Quick check",
                "type": "multiple-choice-question",
                "body_data": {**VALID_MCQ_BODY, "correctOptionId": "z"},
            },
        )

        assert result.isError is True
        assert result.content[0].text == (
            "Invalid body_data for multiple-choice-question: "
            "correctOptionId must match the id of one of the provided options"
        )

    @pytest.mark.asyncio
    async def test_unsupported_type_is_invalid_params(self, tools: ToolRegistry) -> None:
        with pytest.raises(ProtocolError):
            await tools.call(
                "create_activity",
                {"lesson_id": LESSON_ID, "title": "x", "type": "essay", "body_data": {}},
            )


class TestStorageFailureResults:
    """Storage errors become tool error results without internal detail."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("tool", "arguments", "gateway_method", "message"),
        [
            ("list_units", {}, "list_units", "Error listing units: storage operation failed"),
            (
                "list_lessons_for_unit",
                {"unit_id": UNIT_ID},
                "list_lessons",
                "Error listing lessons: storage operation failed",
            ),
            (
                "find_lesson",
                {"title": "x"},
                "find_lessons_by_title",
                "Error finding lessons: storage operation failed",
            ),
            (
                "list_activities",
                {"lesson_id": LESSON_ID},
                "list_activities",
                "Error listing activities: storage operation failed",
            ),
            (
                "create_activity",
                {
                    "lesson_id": LESSON_ID,
                    "title": "x",
                    "type": "text",
                    "body_data": {"text": "y"},
                },
                "create_activity",
                "Error creating activity: storage operation failed",
            ),
        ],
    )
    async def test_storage_error_message(
        self, tool: str, arguments: dict, gateway_method: str, message: str
    ) -> None:
        # Arrange
        gateway = AsyncMock(spec=CatalogGateway)
        getattr(gateway, gateway_method).side_effect = StorageError(
            "Storage operation failed: connection refused by 10.0.0.5", operation=gateway_method
        )
        tools = build_tool_registry(gateway)

        # Act
        result = await tools.call(tool, arguments)

        # Assert
        assert result.isError is True
        assert result.content[0].text == message
