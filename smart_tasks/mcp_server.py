"""MCP server for smart-tasks.

Exposes the chat action endpoint as an MCP tool and as a plain HTTP route,
so it can serve both MCP clients and a conventional web front end.

Usage:
    python -m smart_tasks serve --port 8000
    python -m smart_tasks serve --transport stdio
"""

import json
from typing import Any

from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from smart_tasks.assistant import MESSAGE_REQUIRED, TaskAssistant
from smart_tasks.config import Settings
from smart_tasks.core.llm import LLMClient
from smart_tasks.models.chat import ChatResponse
from smart_tasks.models.task import Task

TRANSCRIBE_DISABLED = {
    "error": "This endpoint is not currently in use",
    "message": "Transcription functionality is disabled in this version",
}


def decode_todos(raw: Any) -> list[Task]:
    """Decode request ``todos``, skipping entries that aren't tasks."""
    if not isinstance(raw, list):
        return []
    todos = []
    for item in raw:
        if isinstance(item, dict) and item.get("id") is not None:
            todos.append(Task.from_dict(item))
    return todos


def status_code_for(response: ChatResponse) -> int:
    """HTTP status for a chat response."""
    if response.ok:
        return 200
    if response.error == MESSAGE_REQUIRED:
        return 400
    return 500


async def handle_chat(assistant: TaskAssistant, body: Any) -> tuple[dict, int]:
    """Run the chat action endpoint on a decoded request body.

    Returns:
        (payload, status_code)
    """
    if not isinstance(body, dict):
        return {"error": "Request body must be a JSON object"}, 400

    message = body.get("message")
    if not isinstance(message, str):
        message = ""

    response = await assistant.respond(message, decode_todos(body.get("todos")))
    return response.to_payload(), status_code_for(response)


def create_assistant(settings: Settings, logger: Any | None = None) -> TaskAssistant:
    """Build a TaskAssistant backed by an OpenAI-compatible client."""
    from openai import AsyncOpenAI

    client = AsyncOpenAI(**settings.client_kwargs())
    llm = LLMClient(
        client,
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    return TaskAssistant(llm, logger=logger)


def create_mcp_server(
    settings: Settings | None = None,
    assistant: TaskAssistant | None = None,
    logger: Any | None = None,
) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        settings: Runtime settings (default: read from the environment).
        assistant: Pre-built assistant; built from ``settings`` if omitted.
        logger: Optional logger passed to the assistant.

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or Settings.from_env()
    assistant = assistant or create_assistant(settings, logger=logger)

    mcp = FastMCP(name="smart-tasks")

    # ─────────────────────────────────────────────────────────────
    # Tools
    # ─────────────────────────────────────────────────────────────

    @mcp.tool()
    async def chat(message: str, todos: list[dict] | None = None) -> dict:
        """Interpret a message about the user's todo list.

        Args:
            message: What the user typed
            todos: The user's current tasks ({id, description, completed, createdAt})

        Returns:
            Reply text and exactly one action to apply to the list
        """
        payload, status_code = await handle_chat(
            assistant, {"message": message, "todos": todos or []}
        )
        return {"status": "success" if status_code == 200 else "error", **payload}

    @mcp.tool()
    async def transcribe() -> dict:
        """Speech transcription (disabled in this version)."""
        return {"status": "error", **TRANSCRIBE_DISABLED}

    # ─────────────────────────────────────────────────────────────
    # HTTP routes
    # ─────────────────────────────────────────────────────────────

    @mcp.custom_route("/api/chat", methods=["POST"])
    async def chat_route(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except json.JSONDecodeError:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)
        payload, status_code = await handle_chat(assistant, body)
        return JSONResponse(payload, status_code=status_code)

    @mcp.custom_route("/api/transcribe", methods=["POST"])
    async def transcribe_route(request: Request) -> JSONResponse:
        return JSONResponse(TRANSCRIBE_DISABLED, status_code=501)

    return mcp
