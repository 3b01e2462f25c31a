"""TaskAssistant - the chat action endpoint.

Given the user's message and their current task list, asks the model for
a reply and reduces it to display text plus one action. This is the
stateless half of a conversation turn; ``ChatSession`` owns the state.
"""

from typing import Any

from smart_tasks.core.extractor import extract_action
from smart_tasks.core.llm import LLMClient
from smart_tasks.models.chat import ChatResponse
from smart_tasks.models.task import Task
from smart_tasks.prompts.builder import build_prompt
from smart_tasks.prompts.schemas import NoneAction
from smart_tasks.prompts.templates import PROVIDER_ERROR_MESSAGE

MESSAGE_REQUIRED = "Message is required"
PROVIDER_FAILED = "Error processing request"


class TaskAssistant:
    """Stateless chat action endpoint.

    Example:
        ```python
        assistant = TaskAssistant(LLMClient(AsyncOpenAI(base_url=...)))

        response = await assistant.respond("add buy milk", todos=[])
        print(response.text)    # "Sure, I've added that."
        print(response.action)  # AddTaskAction(task="buy milk")
        ```
    """

    def __init__(self, llm: LLMClient, logger: Any | None = None):
        """Initialize the assistant.

        Args:
            llm: Completion client used for every turn.
            logger: Optional logger for debug output. If None, no logging.
        """
        self.llm = llm
        self._logger = logger

    def _log(self, message: str, level: str = "debug") -> None:
        """Log message if logger is configured."""
        if self._logger is None:
            return

        log_func = getattr(self._logger, level, self._logger.debug)
        log_func(message)

    async def respond(self, message: str, todos: list[Task]) -> ChatResponse:
        """Produce the reply and action for one user message.

        Never raises. A blank message or a provider failure yields a
        response with ``ok=False`` and a ``none`` action.

        Args:
            message: The user's raw message.
            todos: The user's current tasks, in display order.

        Returns:
            ChatResponse with the display text and the normalized action.
        """
        if not message or not message.strip():
            return ChatResponse(text="", ok=False, error=MESSAGE_REQUIRED)

        prompt = build_prompt(todos, message)

        try:
            reply = await self.llm.complete(prompt)
        except Exception as e:
            self._log(f"[ASSISTANT] Completion failed: {e}", "error")
            return ChatResponse(
                text=PROVIDER_ERROR_MESSAGE,
                action=NoneAction(),
                ok=False,
                error=PROVIDER_FAILED,
                message=str(e),
            )

        extracted = extract_action(reply, logger=self._logger)
        self._log(f"[ASSISTANT] Action: {extracted.action.type}")

        return ChatResponse(text=extracted.display_text, action=extracted.action)
