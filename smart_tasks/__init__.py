"""smart-tasks: Chat-driven personal task list.

A user manages their task list by talking to an assistant. Each model
reply ends with a single JSON instruction that is turned into exactly one
list mutation (add, add several, edit, delete, complete, reopen, or nothing).

Example:
    ```python
    from openai import AsyncOpenAI
    from smart_tasks import (
        ChatSession, JSONTaskStorage, LLMClient, LocalIdentityProvider,
        TaskAssistant, TaskStoreClient,
    )

    identity = LocalIdentityProvider()
    store = TaskStoreClient(JSONTaskStorage("./todos.json"), identity=identity)
    assistant = TaskAssistant(LLMClient(AsyncOpenAI(base_url="https://api.groq.com/openai/v1")))

    session = ChatSession(assistant, store, identity=identity)
    await session.attach()
    await identity.sign_in("user-1")
    await session.send_message("add buy groceries and call mom")
    ```
"""

__version__ = "0.1.0"

# Main entry points
from smart_tasks.assistant import TaskAssistant
from smart_tasks.session import ChatSession

# Core components
from smart_tasks.core.llm import LLMClient
from smart_tasks.core.store import TaskStoreClient
from smart_tasks.core.extractor import ExtractedReply, extract_action
from smart_tasks.core.dispatcher import ActionDispatcher

# Models
from smart_tasks.models.task import Task, normalize_instant, sort_for_display
from smart_tasks.models.chat import (
    ChatMessage,
    ChatResponse,
    ChatRole,
    SessionState,
    TurnState,
)
from smart_tasks.prompts.schemas import (
    Action,
    AddTaskAction,
    AddMultipleTasksAction,
    MarkCompletedAction,
    MarkPendingAction,
    EditTaskAction,
    DeleteTaskAction,
    NoneAction,
)
from smart_tasks.prompts.builder import ChatPrompt, build_prompt

# Interfaces
from smart_tasks.interfaces.storage import TaskStorage
from smart_tasks.interfaces.identity import IdentityProvider

# Implementations
from smart_tasks.storage.json_storage import JSONTaskStorage
from smart_tasks.identity import LocalIdentityProvider

# Configuration and errors
from smart_tasks.config import Settings
from smart_tasks.errors import (
    SmartTasksError,
    ActionValidationError,
    TransportError,
    StoreError,
    CompletionError,
    AuthMismatchError,
    SessionBusyError,
    SessionNotReadyError,
)

__all__ = [
    # Version
    "__version__",
    # Main classes
    "TaskAssistant",
    "ChatSession",
    # Core
    "LLMClient",
    "TaskStoreClient",
    "ExtractedReply",
    "extract_action",
    "ActionDispatcher",
    # Models
    "Task",
    "normalize_instant",
    "sort_for_display",
    "ChatMessage",
    "ChatResponse",
    "ChatRole",
    "SessionState",
    "TurnState",
    "Action",
    "AddTaskAction",
    "AddMultipleTasksAction",
    "MarkCompletedAction",
    "MarkPendingAction",
    "EditTaskAction",
    "DeleteTaskAction",
    "NoneAction",
    "ChatPrompt",
    "build_prompt",
    # Interfaces
    "TaskStorage",
    "IdentityProvider",
    # Implementations
    "JSONTaskStorage",
    "LocalIdentityProvider",
    # Configuration and errors
    "Settings",
    "SmartTasksError",
    "ActionValidationError",
    "TransportError",
    "StoreError",
    "CompletionError",
    "AuthMismatchError",
    "SessionBusyError",
    "SessionNotReadyError",
]
