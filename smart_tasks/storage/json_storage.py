"""JSON file-based storage for task lists.

Provides persistent storage using a JSON file.
Suitable for development and small deployments.
"""

import json
from pathlib import Path
from typing import Any

from smart_tasks.interfaces.storage import TaskStorage


class JSONTaskStorage(TaskStorage):
    """JSON file storage for per-user task documents.

    The file holds one object mapping user ids to their document,
    ``{"<user_id>": {"todos": [...]}}``. Thread-safe for single-process use.

    Example:
        storage = JSONTaskStorage("./todos.json")
        await storage.replace_all("user-1", [task.to_dict()])
        todos = await storage.fetch_all("user-1")
    """

    def __init__(self, path: str | Path = "./todos.json"):
        """Initialize storage.

        Args:
            path: Path to JSON file. Created if doesn't exist.
        """
        self.path = Path(path)
        self._ensure_file()

    def _ensure_file(self) -> None:
        """Create file if it doesn't exist."""
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("{}")

    def _load(self) -> dict[str, dict]:
        """Load all user documents from file."""
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, FileNotFoundError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save_all(self, documents: dict[str, dict]) -> None:
        """Save all user documents to file."""
        self.path.write_text(
            json.dumps(documents, ensure_ascii=False, indent=2, default=str)
        )

    async def fetch_all(self, user_id: str) -> list[dict[str, Any]] | None:
        """Get a user's tasks, or None if the user has no document."""
        document = self._load().get(user_id)
        if document is None:
            return None
        return list(document.get("todos", []))

    async def replace_all(self, user_id: str, todos: list[dict[str, Any]]) -> None:
        """Replace a user's whole task list."""
        documents = self._load()
        documents[user_id] = {"todos": list(todos)}
        self._save_all(documents)
