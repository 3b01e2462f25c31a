"""Action dispatcher.

Turns one normalized action into store mutations and returns the updated
in-memory task list. In-memory state only changes after the corresponding
store write has succeeded.
"""

from dataclasses import replace
from typing import Any

from smart_tasks.core.store import TaskStoreClient
from smart_tasks.errors import ActionValidationError, AuthMismatchError, SmartTasksError
from smart_tasks.models.task import Task
from smart_tasks.prompts.schemas import (
    Action,
    AddMultipleTasksAction,
    AddTaskAction,
    DeleteTaskAction,
    EditTaskAction,
    MarkCompletedAction,
    MarkPendingAction,
    NoneAction,
)

# Failures that degrade an action to a logged no-op. AuthMismatchError is
# always re-raised before these are caught.
_SOFT_ERRORS = (ValueError, SmartTasksError)


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ActionValidationError(f"{name} must be a non-empty string")
    return value.strip()


class ActionDispatcher:
    """Applies actions to a user's task list.

    ``dispatch`` never raises for validation or store failures; those are
    logged as warnings and the list is returned unchanged (or, for a batch,
    with only the successful additions). An identity mismatch is the one
    error that propagates.

    Args:
        store: Store client used for every mutation.
        logger: Optional logger for operator output. If None, no logging.
    """

    def __init__(self, store: TaskStoreClient, logger: Any | None = None):
        self.store = store
        self._logger = logger

    def _log(self, message: str, level: str = "debug") -> None:
        """Log message if logger is configured."""
        if self._logger is None:
            return

        log_func = getattr(self._logger, level, self._logger.debug)
        log_func(message)

    async def dispatch(self, action: Action, tasks: list[Task], user_id: str) -> list[Task]:
        """Apply ``action`` for ``user_id`` and return the new task list.

        The input list is never mutated.
        """
        try:
            if isinstance(action, AddTaskAction):
                return await self._add_task(action, tasks, user_id)
            if isinstance(action, AddMultipleTasksAction):
                return await self._add_multiple(action, tasks, user_id)
            if isinstance(action, (MarkCompletedAction, MarkPendingAction)):
                return await self._set_status(action, tasks, user_id)
            if isinstance(action, EditTaskAction):
                return await self._edit_task(action, tasks, user_id)
            if isinstance(action, DeleteTaskAction):
                return await self._delete_task(action, tasks, user_id)
            if isinstance(action, NoneAction):
                self._log("[DISPATCH] No action needed")
                return list(tasks)
        except AuthMismatchError:
            raise
        except ActionValidationError as e:
            self._log(f"[DISPATCH] Ignoring {action.type}: {e}", "warning")
            return list(tasks)
        except _SOFT_ERRORS as e:
            self._log(f"[DISPATCH] {action.type} failed: {e}", "warning")
            return list(tasks)

        self._log(f"[DISPATCH] Unknown action: {action!r}", "warning")
        return list(tasks)

    async def _add_task(self, action: AddTaskAction, tasks: list[Task], user_id: str) -> list[Task]:
        text = _require_text(action.task, "task")
        task = await self.store.add_task(user_id, text)
        self._log(f"[DISPATCH] Added task {task.id}: {task.description}", "info")
        return [*tasks, task]

    async def _add_multiple(
        self,
        action: AddMultipleTasksAction,
        tasks: list[Task],
        user_id: str,
    ) -> list[Task]:
        if not action.tasks:
            raise ActionValidationError("tasks must be a non-empty list")

        # One store add at a time, in list order.
        created: list[Task] = []
        for entry in action.tasks:
            if not isinstance(entry, str) or not entry.strip():
                self._log(f"[DISPATCH] Skipping invalid task entry {entry!r}")
                continue
            try:
                created.append(await self.store.add_task(user_id, entry))
            except AuthMismatchError:
                raise
            except _SOFT_ERRORS as e:
                self._log(f"[DISPATCH] Could not add task {entry!r}: {e}", "warning")

        self._log(f"[DISPATCH] Added {len(created)}/{len(action.tasks)} tasks", "info")
        return [*tasks, *created]

    async def _set_status(
        self,
        action: MarkCompletedAction | MarkPendingAction,
        tasks: list[Task],
        user_id: str,
    ) -> list[Task]:
        task_id = _require_text(action.task_id, "taskId")
        completed = isinstance(action, MarkCompletedAction)
        found = await self.store.update_status(user_id, task_id, completed)
        if not found:
            self._log(f"[DISPATCH] No task with id {task_id} to update", "warning")
            return list(tasks)
        return [replace(t, completed=completed) if t.id == task_id else t for t in tasks]

    async def _edit_task(self, action: EditTaskAction, tasks: list[Task], user_id: str) -> list[Task]:
        task_id = _require_text(action.task_id, "taskId")
        text = _require_text(action.task, "task")
        found = await self.store.update_text(user_id, task_id, text)
        if not found:
            self._log(f"[DISPATCH] No task with id {task_id} to edit", "warning")
            return list(tasks)
        return [replace(t, description=text) if t.id == task_id else t for t in tasks]

    async def _delete_task(self, action: DeleteTaskAction, tasks: list[Task], user_id: str) -> list[Task]:
        task_id = _require_text(action.task_id, "taskId")
        found = await self.store.delete_task(user_id, task_id)
        if not found:
            self._log(f"[DISPATCH] No task with id {task_id} to delete", "warning")
            return list(tasks)
        return [t for t in tasks if t.id != task_id]

