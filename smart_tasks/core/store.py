"""Task store client.

All list mutations go through here. Each one reads the user's whole
collection, applies a single change and writes the whole collection back,
retrying the full read-modify-write on transient failure.
"""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from smart_tasks.errors import AuthMismatchError, StoreError
from smart_tasks.interfaces.identity import IdentityProvider
from smart_tasks.interfaces.storage import TaskStorage
from smart_tasks.models.task import Task

T = TypeVar("T")

TodoList = list[dict[str, Any]]


class TaskStoreClient:
    """Read/replace access to per-user task collections with bounded retry.

    Holds no cache: every call goes to storage.

    Args:
        storage: Backing per-user document storage.
        identity: If given, every call is checked against its current user.
        max_attempts: Attempts per operation before giving up.
        retry_delay: Base backoff in seconds; attempt ``n`` waits ``n * retry_delay``.
        logger: Optional logger for operator output. If None, no logging.
    """

    def __init__(
        self,
        storage: TaskStorage,
        identity: IdentityProvider | None = None,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        logger: Any | None = None,
    ):
        self.storage = storage
        self.identity = identity
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self._logger = logger

    def _log(self, message: str, level: str = "debug") -> None:
        """Log message if logger is configured."""
        if self._logger is None:
            return

        log_func = getattr(self._logger, level, self._logger.debug)
        log_func(message)

    def _check_user(self, user_id: str) -> None:
        if not user_id:
            raise ValueError("No user ID provided")
        if self.identity is not None and self.identity.current_user_id != user_id:
            self._log(f"[STORE] Refusing access for user {user_id}: identity mismatch", "error")
            raise AuthMismatchError("User not authenticated or ID mismatch")

    async def _with_retry(self, operation: Callable[[], Awaitable[T]], name: str) -> T:
        """Run ``operation``, retrying with linearly increasing backoff."""
        last_error: Exception | None = None

        for attempt in range(self.max_attempts):
            try:
                return await operation()
            except Exception as e:
                last_error = e
                self._log(
                    f"[STORE] {name} failed (attempt {attempt + 1}/{self.max_attempts}): {e}",
                    "warning",
                )
                if attempt < self.max_attempts - 1 and self.retry_delay > 0:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise StoreError(f"{name} failed after {self.max_attempts} attempts: {last_error}") from last_error

    async def _read(self, user_id: str) -> TodoList:
        todos = await self.storage.fetch_all(user_id)
        if todos is None:
            self._log(f"[STORE] No document for user {user_id}, creating an empty one", "info")
            await self.storage.replace_all(user_id, [])
            return []
        return todos

    async def _mutate(
        self,
        user_id: str,
        task_id: str,
        change: Callable[[dict[str, Any]], dict[str, Any] | None],
        name: str,
    ) -> bool:
        """Apply ``change`` to the task with ``task_id`` and write the collection.

        ``change`` returns the replacement task, or None to remove it.
        Returns False (and writes nothing) if no task has that id.
        """
        self._check_user(user_id)

        async def operation() -> bool:
            todos = await self._read(user_id)
            if not any(str(t.get("id")) == task_id for t in todos):
                return False
            updated = []
            for todo in todos:
                if str(todo.get("id")) == task_id:
                    todo = change(todo)
                if todo is not None:
                    updated.append(todo)
            await self.storage.replace_all(user_id, updated)
            return True

        return await self._with_retry(operation, name)

    async def get_tasks(self, user_id: str) -> list[Task]:
        """Fetch a user's tasks, creating an empty collection on first access.

        Raises:
            StoreError: If the collection can't be read or holds malformed tasks.
        """
        self._check_user(user_id)
        todos = await self._with_retry(lambda: self._read(user_id), "fetch tasks")
        try:
            return [Task.from_dict(t) for t in todos]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            self._log(f"[STORE] Malformed task document for user {user_id}: {e!r}", "error")
            raise StoreError(f"Malformed task document: {e!r}") from e

    async def add_task(self, user_id: str, text: str) -> Task:
        """Create a task and append it to the user's collection."""
        description = (text or "").strip()
        if not description:
            raise ValueError("Todo text cannot be empty")
        self._check_user(user_id)

        task = Task.create(description)
        await self._with_retry(
            lambda: self.storage.append(user_id, task.to_dict()),
            "add task",
        )
        return task

    async def update_status(self, user_id: str, task_id: str, completed: bool) -> bool:
        """Set a task's completed flag. Returns False if the task doesn't exist."""
        return await self._mutate(
            user_id,
            task_id,
            lambda todo: {**todo, "completed": completed},
            "update task status",
        )

    async def update_text(self, user_id: str, task_id: str, text: str) -> bool:
        """Replace a task's description. Returns False if the task doesn't exist."""
        description = (text or "").strip()
        if not description:
            raise ValueError("Todo text cannot be empty")
        return await self._mutate(
            user_id,
            task_id,
            lambda todo: {**todo, "description": description},
            "update task text",
        )

    async def delete_task(self, user_id: str, task_id: str) -> bool:
        """Remove a task. Returns False if the task doesn't exist."""
        return await self._mutate(
            user_id,
            task_id,
            lambda todo: None,
            "delete task",
        )
