"""Conversation models for the chat-driven task assistant."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from smart_tasks.prompts.schemas import Action, NoneAction, action_to_payload


class ChatRole(Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"


class SessionState(Enum):
    """Lifecycle of a session with respect to the signed-in user.

    SIGNED_OUT: No identity; history and tasks are empty.
    LOADING: Identity known, task list not (yet) fetched.
    READY: Task list fetched; turns may run.
    """
    SIGNED_OUT = "signed_out"
    LOADING = "loading"
    READY = "ready"


class TurnState(Enum):
    """Progress of the single in-flight conversation turn."""
    IDLE = "idle"
    SENDING = "sending"
    AWAITING_COMPLETION = "awaiting_completion"
    DISPATCHING = "dispatching"


@dataclass
class ChatMessage:
    """A message in the session's chat history."""
    role: ChatRole
    content: str
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ChatResponse:
    """Result of the chat action endpoint.

    Attributes:
        text: Text to show the user (instruction removed, or an apology).
        action: The single normalized action for this turn.
        ok: False when the request was rejected or the provider failed.
        error: Short error label when ``ok`` is False.
        message: Underlying error detail when ``ok`` is False.
    """
    text: str
    action: Action = field(default_factory=NoneAction)
    ok: bool = True
    error: str | None = None
    message: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Convert to the endpoint's JSON body."""
        if self.ok:
            return {"text": self.text, "action": action_to_payload(self.action)}
        payload: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        if self.text:
            payload["text"] = self.text
        payload["action"] = {"type": "none"}
        return payload
