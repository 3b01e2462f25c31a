"""Abstract task storage interface."""

from abc import ABC, abstractmethod
from typing import Any


class TaskStorage(ABC):
    """Abstract interface for per-user task documents.

    Each user owns exactly one document holding the full task collection.
    The document is always read and written as a whole; implementations
    never see partial updates. Tasks are passed in their stored dict shape
    (``id``, ``description``, ``completed``, ``createdAt``).

    The storage can be backed by various systems:

    - Document databases (Firestore, MongoDB, DynamoDB)
    - Key-value stores (Redis)
    - File-based storage
    - In-memory storage for testing
    """

    @abstractmethod
    async def fetch_all(self, user_id: str) -> list[dict[str, Any]] | None:
        """Read a user's task collection.

        Args:
            user_id: Owner of the collection.

        Returns:
            The stored tasks in order, or None if the user has no document yet.
        """
        ...

    @abstractmethod
    async def replace_all(self, user_id: str, todos: list[dict[str, Any]]) -> None:
        """Replace a user's whole task collection, creating it if needed.

        Args:
            user_id: Owner of the collection.
            todos: The complete new collection.
        """
        ...

    async def append(self, user_id: str, todo: dict[str, Any]) -> None:
        """Append one task to a user's collection.

        Default implementation reads then replaces the whole collection.
        Implementations with an atomic array-append may override.

        Args:
            user_id: Owner of the collection.
            todo: The task to append.
        """
        todos = await self.fetch_all(user_id) or []
        await self.replace_all(user_id, [*todos, todo])
