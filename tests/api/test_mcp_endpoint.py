"""
Tests for the /mcp routes: authentication, session routing and the full
client flow over HTTP.

System role: Verification of the public protocol surface
"""

import json

from fastapi.testclient import TestClient

from tests.helpers import (
    INITIALIZED_NOTIFICATION,
    LESSON_ID,
    SERVICE_KEY,
    UNIT_ID,
    VALID_MCQ_BODY,
    initialize_message,
    request_message,
    tool_call_message,
)


def _open_session(client: TestClient, headers: dict[str, str]) -> dict[str, str]:
    """Run the handshake and return headers carrying the session token."""
    response = client.post("/mcp", json=initialize_message(), headers=headers)
    assert response.status_code == 200
    session_headers = {**headers, "mcp-session-id": response.headers["mcp-session-id"]}
    assert client.post("/mcp", json=INITIALIZED_NOTIFICATION, headers=session_headers).status_code == 202
    return session_headers


def _call_tool(client: TestClient, headers: dict[str, str], name: str, arguments: dict) -> dict:
    response = client.post("/mcp", json=tool_call_message(1, name, arguments), headers=headers)
    assert response.status_code == 200
    return response.json()["result"]


def _sse_messages(text: str) -> list[dict]:
    return [
        json.loads(line[len("data: "):])
        for line in text.splitlines()
        if line.startswith("data: ")
    ]


class TestAuthentication:
    """Test suite for the service key gate."""

    def test_missing_key_is_401_and_creates_no_session(self, client: TestClient) -> None:
        # Act
        response = client.post("/mcp", json=initialize_message())

        # Assert
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert "x-mcp-key" in response.json()["message"]
        assert len(client.app.state.multiplexer) == 0

    def test_wrong_key_is_403(self, client: TestClient) -> None:
        response = client.post(
            "/mcp", json=initialize_message(), headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden", "message": "Invalid MCP service key"}
        assert len(client.app.state.multiplexer) == 0

    def test_key_header_is_accepted(self, client: TestClient) -> None:
        response = client.post(
            "/mcp", json=initialize_message(), headers={"x-mcp-key": SERVICE_KEY}
        )

        assert response.status_code == 200

    def test_get_and_delete_are_also_guarded(self, client: TestClient) -> None:
        assert client.get("/mcp").status_code == 401
        assert client.delete("/mcp", headers={"x-mcp-key": "nope"}).status_code == 403


class TestSessionRouting:
    """Test suite for session header handling."""

    def test_initialize_returns_session_header(self, client: TestClient, auth_headers) -> None:
        # Act
        response = client.post("/mcp", json=initialize_message(), headers=auth_headers)

        # Assert
        token = response.headers["mcp-session-id"]
        assert response.status_code == 200
        assert response.json()["result"]["serverInfo"]["name"] == "planner-mcp"
        assert token in client.app.state.multiplexer.registry

    def test_non_initialize_without_session_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.post("/mcp", json=request_message(1, "tools/list"), headers=auth_headers)

        assert response.status_code == 400
        assert "mcp-session-id" not in response.headers
        assert len(client.app.state.multiplexer) == 0

    def test_unparseable_body_is_400(self, client: TestClient, auth_headers) -> None:
        response = client.post(
            "/mcp",
            content=b"{oops",
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32700

    def test_unknown_session_is_404(self, client: TestClient, auth_headers) -> None:
        response = client.post(
            "/mcp",
            json=request_message(1, "ping"),
            headers={**auth_headers, "mcp-session-id": "does-not-exist"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == {"code": -32001, "message": "Session not found"}

    def test_get_and_delete_need_session_header(self, client: TestClient, auth_headers) -> None:
        get_response = client.get("/mcp", headers=auth_headers)
        delete_response = client.delete("/mcp", headers=auth_headers)

        assert get_response.status_code == 400
        assert delete_response.status_code == 400
        assert get_response.json()["error"]["code"] == -32000

    def test_delete_closes_session(self, client: TestClient, auth_headers) -> None:
        # Arrange
        headers = _open_session(client, auth_headers)

        # Act
        response = client.delete("/mcp", headers=headers)

        # Assert
        assert response.status_code == 200
        assert client.post("/mcp", json=request_message(2, "ping"), headers=headers).status_code == 404
        assert client.delete("/mcp", headers=headers).status_code == 404

    def test_sessions_are_independent(self, client: TestClient, auth_headers) -> None:
        first = _open_session(client, auth_headers)
        second = _open_session(client, auth_headers)

        client.delete("/mcp", headers=first)

        response = client.post("/mcp", json=request_message(1, "ping"), headers=second)
        assert response.status_code == 200
        assert response.json()["result"] == {}


class TestEventStream:
    """Test suite for GET /mcp."""

    def test_queued_notifications_are_streamed(self, client: TestClient, auth_headers) -> None:
        # Arrange
        headers = _open_session(client, auth_headers)
        _call_tool(client, headers, "list_lessons_for_unit", {"unit_id": UNIT_ID})
        _call_tool(
            client,
            headers,
            "create_activity",
            {"lesson_id": LESSON_ID, "title": "Reading", "type": "text",
             "body_data": {"text": "x"}, "is_summative": True},
        )

        # Act
        response = client.get("/mcp", headers=headers)

        # Assert
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        messages = _sse_messages(response.text)
        assert [m["params"]["level"] for m in messages] == ["warning"]
        assert messages[0]["params"]["data"]["tool"] == "create_activity"
        assert client.get("/mcp", headers=headers).text == ""

    def test_empty_queue_streams_nothing(self, client: TestClient, auth_headers) -> None:
        headers = _open_session(client, auth_headers)

        response = client.get("/mcp", headers=headers)

        assert response.status_code == 200
        assert response.text == ""

    def test_unknown_session_is_404(self, client: TestClient, auth_headers) -> None:
        response = client.get("/mcp", headers={**auth_headers, "mcp-session-id": "gone"})

        assert response.status_code == 404


class TestClientFlow:
    """A protocol client working through the catalog."""

    def test_tools_are_listed(self, client: TestClient, auth_headers) -> None:
        headers = _open_session(client, auth_headers)

        response = client.post("/mcp", json=request_message(2, "tools/list"), headers=headers)

        names = [tool["name"] for tool in response.json()["result"]["tools"]]
        assert names == [
            "list_units",
            "list_lessons_for_unit",
            "find_lesson",
            "create_activity",
            "list_activities",
        ]

    def test_create_then_list_activity(self, client: TestClient, auth_headers) -> None:
        # Arrange
        headers = _open_session(client, auth_headers)
        units = json.loads(_call_tool(client, headers, "list_units", {"subject": "Maths"})["content"][0]["text"])
        lessons = json.loads(
            _call_tool(client, headers, "find_lesson", {"title": "adding", "unit_id": units[0]["unit_id"]})[
                "content"
            ][0]["text"]
        )

        # Act
        created = _call_tool(
            client,
            headers,
            "create_activity",
            {
                "lesson_id": lessons[0]["lesson_id"],
                "title": "Quick check",
                "type": "multiple-choice-question",
                "body_data": VALID_MCQ_BODY,
            },
        )
        listed = _call_tool(client, headers, "list_activities", {"lesson_id": LESSON_ID})

        # Assert
        assert created["isError"] is False
        activity = json.loads(created["content"][0]["text"])
        assert activity["active"] is True
        listed_ids = [item["activity_id"] for item in json.loads(listed["content"][0]["text"])]
        assert activity["activity_id"] in listed_ids

    def test_summative_text_is_rejected_over_http(self, client: TestClient, auth_headers) -> None:
        # Arrange
        headers = _open_session(client, auth_headers)

        # Act
        result = _call_tool(
            client,
            headers,
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
        assert result["isError"] is True
        assert "non-scorable" in result["content"][0]["text"]
        listed = _call_tool(client, headers, "list_activities", {"lesson_id": LESSON_ID})
        assert len(json.loads(listed["content"][0]["text"])) == 1

    def test_invalid_tool_arguments_are_error_results(
        self, client: TestClient, auth_headers
    ) -> None:
        headers = _open_session(client, auth_headers)

        result = _call_tool(client, headers, "find_lesson", {})

        assert result["isError"] is True
        assert result["content"][0]["text"].startswith("Input validation error")

    def test_shutdown_closes_live_sessions(self, test_settings) -> None:
        from planner_mcp.api.main import create_app

        app = create_app(test_settings)
        with TestClient(app) as client:
            _open_session(client, {"x-mcp-key": SERVICE_KEY})
            engine = next(iter(app.state.multiplexer.registry.snapshot())).engine

        assert engine.closed is True
        assert len(app.state.multiplexer) == 0
