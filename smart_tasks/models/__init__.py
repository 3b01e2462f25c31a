"""Data models for smart-tasks."""

from smart_tasks.models.task import (
    Task,
    normalize_instant,
    new_task_id,
    sort_for_display,
)
from smart_tasks.models.chat import (
    ChatMessage,
    ChatResponse,
    ChatRole,
    SessionState,
    TurnState,
)

__all__ = [
    "Task",
    "normalize_instant",
    "new_task_id",
    "sort_for_display",
    "ChatMessage",
    "ChatResponse",
    "ChatRole",
    "SessionState",
    "TurnState",
]
