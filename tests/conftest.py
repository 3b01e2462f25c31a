"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

from smart_tasks.interfaces.storage import TaskStorage
from smart_tasks.models.task import Task


# ─────────────────────────────────────────────────────────────────
# Mock OpenAI Client
# ─────────────────────────────────────────────────────────────────

class MockCompletions:
    """Scripted ``chat.completions``: returns replies in order, or raises."""

    def __init__(self, replies: list[str | None] | None = None, error: Exception | None = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error

        content = self.replies.pop(0) if self.replies else 'OK. {"type":"none"}'
        mock_message = MagicMock()
        mock_message.content = content
        mock_choice = MagicMock()
        mock_choice.message = mock_message
        mock_resp = MagicMock()
        mock_resp.choices = [mock_choice]
        return mock_resp


class MockChat:
    def __init__(self, completions: MockCompletions):
        self.completions = completions


class MockAsyncOpenAI:
    def __init__(self, replies: list[str | None] | None = None, error: Exception | None = None):
        self.chat = MockChat(MockCompletions(replies, error))

    @property
    def calls(self) -> list[dict[str, Any]]:
        return self.chat.completions.calls


# ─────────────────────────────────────────────────────────────────
# In-Memory Storage
# ─────────────────────────────────────────────────────────────────

class InMemoryTaskStorage(TaskStorage):
    """In-memory task storage for testing.

    Args:
        failures: Number of upcoming calls (of any kind) that raise.
        failing_texts: Appends of tasks with these descriptions always raise.
    """

    def __init__(self, failures: int = 0, failing_texts: set[str] | None = None) -> None:
        self.documents: dict[str, list[dict[str, Any]]] = {}
        self.failures = failures
        self.failing_texts = failing_texts or set()
        self.fetch_calls = 0
        self.replace_calls = 0

    def _maybe_fail(self) -> None:
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("store unavailable")

    async def fetch_all(self, user_id: str) -> list[dict[str, Any]] | None:
        self.fetch_calls += 1
        self._maybe_fail()
        todos = self.documents.get(user_id)
        return None if todos is None else [dict(t) for t in todos]

    async def replace_all(self, user_id: str, todos: list[dict[str, Any]]) -> None:
        self.replace_calls += 1
        self._maybe_fail()
        self.documents[user_id] = [dict(t) for t in todos]

    async def append(self, user_id: str, todo: dict[str, Any]) -> None:
        if todo.get("description") in self.failing_texts:
            raise ConnectionError(f"cannot store {todo['description']}")
        await super().append(user_id, todo)


# ─────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────

class RecordingLogger:
    """Logger stand-in that records (level, message) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, message: str) -> None:
        self.records.append((level, message))

    def debug(self, message: str) -> None:
        self._record("debug", message)

    def info(self, message: str) -> None:
        self._record("info", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.records if lvl == level]


def create_test_task(
    task_id: str = "1",
    description: str = "Test task",
    completed: bool = False,
    created_at: datetime | None = None,
) -> Task:
    """Create a task for testing."""
    return Task(
        id=task_id,
        description=description,
        completed=completed,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def seed_storage(storage: InMemoryTaskStorage, user_id: str, tasks: list[Task]) -> None:
    """Put tasks straight into storage, bypassing the client."""
    storage.documents[user_id] = [t.to_dict() for t in tasks]
