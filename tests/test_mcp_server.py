"""Tests for the MCP server and HTTP routes."""

import pytest
from starlette.testclient import TestClient

from smart_tasks.assistant import MESSAGE_REQUIRED, PROVIDER_FAILED, TaskAssistant
from smart_tasks.config import Settings
from smart_tasks.core.llm import LLMClient
from smart_tasks.mcp_server import (
    TRANSCRIBE_DISABLED,
    create_mcp_server,
    decode_todos,
    handle_chat,
)

from tests.conftest import MockAsyncOpenAI


def make_assistant(replies: list[str] | None = None, error: Exception | None = None) -> tuple[TaskAssistant, MockAsyncOpenAI]:
    client = MockAsyncOpenAI(replies=replies, error=error)
    return TaskAssistant(LLMClient(client)), client


class TestDecodeTodos:
    """Tests for decode_todos()."""

    def test_decodes_task_dicts(self) -> None:
        todos = decode_todos([
            {"id": "1", "description": "A", "completed": True, "createdAt": "2024-01-01T00:00:00Z"},
            {"id": 2, "description": "B"},
        ])

        assert [(t.id, t.description, t.completed) for t in todos] == [
            ("1", "A", True),
            ("2", "B", False),
        ]

    def test_skips_malformed_entries(self) -> None:
        assert decode_todos(["x", {"description": "no id"}, None]) == []

    def test_non_list_is_empty(self) -> None:
        assert decode_todos({"id": "1"}) == []
        assert decode_todos(None) == []


class TestHandleChat:
    """Tests for handle_chat()."""

    @pytest.mark.asyncio
    async def test_success(self) -> None:
        assistant, client = make_assistant(['Deleted. {"type":"delete_task","taskId":"7"}'])

        payload, status = await handle_chat(
            assistant,
            {"message": "remove laundry", "todos": [{"id": "7", "description": "Laundry"}]},
        )

        assert status == 200
        assert payload == {"text": "Deleted.", "action": {"type": "delete_task", "taskId": "7"}}
        assert "7: Laundry (pending)" in client.calls[0]["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_out_of_range_created_at_is_tolerated(self) -> None:
        assistant, client = make_assistant(["Hi!"])

        payload, status = await handle_chat(
            assistant,
            {"message": "hi", "todos": [{"id": "1", "description": "A", "createdAt": 1e20}]},
        )

        assert status == 200
        assert payload["text"] == "Hi!"
        assert "1: A (pending)" in client.calls[0]["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_missing_message_is_400(self) -> None:
        assistant, client = make_assistant()

        payload, status = await handle_chat(assistant, {"todos": []})

        assert status == 400
        assert payload["error"] == MESSAGE_REQUIRED
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_non_object_body_is_400(self) -> None:
        assistant, _ = make_assistant()

        _, status = await handle_chat(assistant, ["hello"])

        assert status == 400

    @pytest.mark.asyncio
    async def test_provider_failure_is_500(self) -> None:
        assistant, _ = make_assistant(error=RuntimeError("boom"))

        payload, status = await handle_chat(assistant, {"message": "hi", "todos": []})

        assert status == 500
        assert payload["error"] == PROVIDER_FAILED
        assert payload["message"] == "boom"
        assert payload["action"] == {"type": "none"}


class TestServer:
    """Tests for create_mcp_server()."""

    @pytest.mark.asyncio
    async def test_registers_tools(self) -> None:
        assistant, _ = make_assistant()
        mcp = create_mcp_server(settings=Settings(), assistant=assistant)

        tools = await mcp.list_tools()

        assert {t.name for t in tools} == {"chat", "transcribe"}

    def test_chat_route(self) -> None:
        assistant, _ = make_assistant(['Sure! {"type":"add_task","task":"Buy milk"}'])
        app = create_mcp_server(settings=Settings(), assistant=assistant).streamable_http_app()
        client = TestClient(app)

        response = client.post("/api/chat", json={"message": "add buy milk", "todos": []})

        assert response.status_code == 200
        assert response.json() == {"text": "Sure!", "action": {"type": "add_task", "task": "Buy milk"}}

    def test_chat_route_rejects_invalid_json(self) -> None:
        assistant, _ = make_assistant()
        app = create_mcp_server(settings=Settings(), assistant=assistant).streamable_http_app()
        client = TestClient(app)

        response = client.post(
            "/api/chat",
            content=b"not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400

    def test_transcribe_route_is_disabled(self) -> None:
        assistant, _ = make_assistant()
        app = create_mcp_server(settings=Settings(), assistant=assistant).streamable_http_app()

        response = TestClient(app).post("/api/transcribe")

        assert response.status_code == 501
        assert response.json() == TRANSCRIBE_DISABLED
