"""Task data models."""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_instant(value: Any) -> datetime:
    """Normalize a stored creation time to an aware UTC datetime.

    Storage may hand back any of:
    - a ``datetime`` (naive values are taken as UTC)
    - a timestamp mapping ``{"seconds": ..., "nanoseconds": ...}``
      (``_seconds``/``_nanoseconds`` also accepted)
    - an ISO-8601 string, with or without a trailing ``Z``
    - an epoch number in milliseconds

    Anything else normalizes to the Unix epoch.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            try:
                return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
            except (OverflowError, OSError, ValueError, TypeError):
                return EPOCH
        return EPOCH

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return normalize_instant(datetime.fromisoformat(text))
        except ValueError:
            return EPOCH

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return EPOCH

    return EPOCH


class TaskIdGenerator:
    """Time-based task ids (epoch milliseconds), strictly increasing per process."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            candidate = int(time.time() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


new_task_id = TaskIdGenerator()


@dataclass
class Task:
    """A single entry in a user's task list.

    Attributes:
        id: Unique within the owner's collection; never changes.
        description: Task text, never empty.
        completed: Whether the task is done.
        created_at: Creation instant (aware UTC).
    """
    id: str
    description: str
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, description: str) -> "Task":
        """Create a new pending task with a fresh id."""
        return cls(id=new_task_id(), description=description)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a Task from its stored document shape."""
        return cls(
            id=str(data["id"]),
            description=data.get("description", ""),
            completed=bool(data.get("completed", False)),
            created_at=normalize_instant(data.get("createdAt", data.get("created_at"))),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored document shape."""
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
        }

    def render(self) -> str:
        """Render as a prompt line: ``id: description (completed|pending)``."""
        status = "completed" if self.completed else "pending"
        return f"{self.id}: {self.description} ({status})"


def sort_for_display(tasks: list[Task]) -> list[Task]:
    """Pending tasks first, then completed; newest first within each group."""
    return sorted(
        tasks,
        key=lambda t: (t.completed, -t.created_at.timestamp()),
    )
