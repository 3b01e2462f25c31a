"""ChatSession - one user's conversation with the task assistant.

The session:
1. Follows the identity provider (signed out → loading → ready)
2. Owns the chat history and the cached task list
3. Runs one turn at a time: message → completion → action → dispatch
4. Surfaces every failure as an assistant chat message
"""

from typing import Any, Callable

from smart_tasks.assistant import TaskAssistant
from smart_tasks.core.dispatcher import ActionDispatcher
from smart_tasks.core.store import TaskStoreClient
from smart_tasks.errors import (
    AuthMismatchError,
    SessionBusyError,
    SessionNotReadyError,
    StoreError,
)
from smart_tasks.interfaces.identity import IdentityProvider
from smart_tasks.models.chat import ChatMessage, ChatRole, SessionState, TurnState
from smart_tasks.models.task import Task, sort_for_display
from smart_tasks.prompts.schemas import (
    Action,
    AddTaskAction,
    DeleteTaskAction,
    MarkCompletedAction,
    MarkPendingAction,
)
from smart_tasks.prompts.templates import (
    FETCH_ERROR_MESSAGE,
    TURN_ERROR_MESSAGE,
    WELCOME_MESSAGE,
)


class ChatSession:
    """Conversation orchestrator for a single session.

    Turns are strictly sequential: while one is in flight the session is
    busy and any further message or list operation is rejected. The cached
    task list only changes after the store confirms a write.

    Example:
        ```python
        session = ChatSession(assistant, store, identity=identity)
        await session.attach()
        await identity.sign_in("user-1")

        reply = await session.send_message("add buy groceries and call mom")
        print(reply.content)
        print([t.description for t in session.tasks])
        ```
    """

    def __init__(
        self,
        assistant: TaskAssistant,
        store: TaskStoreClient,
        identity: IdentityProvider | None = None,
        logger: Any | None = None,
    ):
        """Initialize the session.

        Args:
            assistant: Chat action endpoint used for every turn.
            store: Store client; the only path to durable task state.
            identity: Optional identity provider to follow via ``attach()``.
            logger: Optional logger for operator output. If None, no logging.
        """
        self.assistant = assistant
        self.store = store
        self.identity = identity
        self._logger = logger
        self._dispatcher = ActionDispatcher(store, logger=logger)

        self._state = SessionState.SIGNED_OUT
        self._turn = TurnState.IDLE
        self._user_id: str | None = None
        self._messages: list[ChatMessage] = []
        self._tasks: list[Task] = []
        self._unsubscribe: Callable[[], None] | None = None
        # Bumped on every identity change; results of older turns are dropped
        self._generation = 0

    def _log(self, message: str, level: str = "debug") -> None:
        """Log message if logger is configured."""
        if self._logger is None:
            return

        log_func = getattr(self._logger, level, self._logger.debug)
        log_func(message)

    # ─────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def turn_state(self) -> TurnState:
        return self._turn

    @property
    def is_busy(self) -> bool:
        """True while a turn is in flight."""
        return self._turn is not TurnState.IDLE

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def sorted_tasks(self) -> list[Task]:
        """Tasks in display order: pending first, newest first."""
        return sort_for_display(self._tasks)

    def _append(self, role: ChatRole, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self._messages.append(message)
        return message

    def _require_user(self) -> str:
        if self._user_id is None:
            raise SessionNotReadyError("No user is signed in")
        return self._user_id

    def _require_idle(self) -> None:
        if self.is_busy:
            raise SessionBusyError("A message is already being processed")

    def _is_stale(self, generation: int) -> bool:
        """True if the identity changed since ``generation`` was taken."""
        if generation != self._generation:
            self._log("[SESSION] Identity changed mid-operation, dropping result")
            return True
        return False

    # ─────────────────────────────────────────────────────────────
    # Identity
    # ─────────────────────────────────────────────────────────────

    async def attach(self) -> None:
        """Follow the identity provider, picking up an existing sign-in."""
        if self.identity is None:
            raise ValueError("Session has no identity provider")
        self._unsubscribe = self.identity.subscribe(self.on_identity_changed)
        if self.identity.current_user_id is not None:
            await self.on_identity_changed(self.identity.current_user_id)

    def detach(self) -> None:
        """Stop following the identity provider."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def on_identity_changed(self, user_id: str | None) -> None:
        """Handle sign-in (``user_id``) or sign-out (None)."""
        if user_id is None:
            self._generation += 1
            self._log(f"[SESSION] User {self._user_id} signed out")
            self._user_id = None
            self._messages = []
            self._tasks = []
            self._state = SessionState.SIGNED_OUT
            return

        if user_id == self._user_id and self._state is SessionState.READY:
            return

        self._log(f"[SESSION] User {user_id} signed in")
        self._generation += 1
        self._user_id = user_id
        self._messages = []
        self._tasks = []
        self._state = SessionState.LOADING
        self._append(ChatRole.ASSISTANT, WELCOME_MESSAGE)
        await self.reload()

    async def reload(self) -> bool:
        """Fetch the task list. Returns True once the session is ready.

        A failed fetch leaves the session loading with an empty list and
        adds an apology to the chat; calling ``reload`` again retries.
        """
        user_id = self._require_user()
        generation = self._generation
        try:
            tasks = await self.store.get_tasks(user_id)
        except StoreError as e:
            if self._is_stale(generation):
                return False
            self._log(f"[SESSION] Could not fetch tasks for {user_id}: {e}", "error")
            self._tasks = []
            self._state = SessionState.LOADING
            self._append(ChatRole.ASSISTANT, FETCH_ERROR_MESSAGE)
            return False

        if self._is_stale(generation):
            return False
        self._tasks = tasks
        self._log(f"[SESSION] Loaded {len(self._tasks)} tasks for {user_id}")
        self._state = SessionState.READY
        return True

    # ─────────────────────────────────────────────────────────────
    # Conversation
    # ─────────────────────────────────────────────────────────────

    async def send_message(self, text: str) -> ChatMessage | None:
        """Run one conversation turn.

        Args:
            text: The user's message. Blank messages are ignored.

        Returns:
            The assistant's chat message, or None if ``text`` was blank or
            the signed-in user changed before the turn finished.

        Raises:
            SessionNotReadyError: No user signed in or tasks not loaded.
            SessionBusyError: Another turn is in flight.
            AuthMismatchError: The store rejected the session's identity.
        """
        if not text or not text.strip():
            return None
        user_id = self._require_user()
        if self._state is not SessionState.READY:
            raise SessionNotReadyError("Tasks are not loaded yet")
        self._require_idle()

        generation = self._generation
        self._append(ChatRole.USER, text)
        self._turn = TurnState.SENDING
        try:
            self._turn = TurnState.AWAITING_COMPLETION
            response = await self.assistant.respond(text, self._tasks)
            if self._is_stale(generation):
                return None

            if not response.ok:
                self._log(f"[SESSION] Chat request failed: {response.error}: {response.message}", "error")
                return self._append(ChatRole.ASSISTANT, response.text or TURN_ERROR_MESSAGE)

            reply = self._append(ChatRole.ASSISTANT, response.text)

            self._turn = TurnState.DISPATCHING
            tasks = await self._dispatcher.dispatch(response.action, self._tasks, user_id)
            if self._is_stale(generation):
                return None
            self._tasks = tasks
            return reply
        except AuthMismatchError:
            raise
        except Exception as e:
            if self._is_stale(generation):
                return None
            self._log(f"[SESSION] Turn failed: {e}", "error")
            return self._append(ChatRole.ASSISTANT, TURN_ERROR_MESSAGE)
        finally:
            self._turn = TurnState.IDLE

    # ─────────────────────────────────────────────────────────────
    # Direct list operations
    # ─────────────────────────────────────────────────────────────

    async def _apply(self, action: Action) -> list[Task]:
        user_id = self._require_user()
        self._require_idle()
        generation = self._generation
        self._turn = TurnState.DISPATCHING
        try:
            tasks = await self._dispatcher.dispatch(action, self._tasks, user_id)
            if not self._is_stale(generation):
                self._tasks = tasks
        finally:
            self._turn = TurnState.IDLE
        return self.tasks

    async def add_task(self, text: str) -> list[Task]:
        """Add a task from the list view."""
        return await self._apply(AddTaskAction(task=text))

    async def toggle_task(self, task_id: str) -> list[Task]:
        """Flip a task between completed and pending."""
        task = next((t for t in self._tasks if t.id == task_id), None)
        if task is None:
            self._log(f"[SESSION] No task with id {task_id} to toggle", "warning")
            return self.tasks
        if task.completed:
            return await self._apply(MarkPendingAction(task_id=task_id))
        return await self._apply(MarkCompletedAction(task_id=task_id))

    async def delete_task(self, task_id: str) -> list[Task]:
        """Delete a task from the list view."""
        return await self._apply(DeleteTaskAction(task_id=task_id))
