"""Prompt construction for the task assistant."""

from dataclasses import dataclass

from smart_tasks.models.task import Task
from smart_tasks.prompts.templates import EMPTY_TASKS_PLACEHOLDER, TASK_ASSISTANT_SYSTEM


@dataclass(frozen=True)
class ChatPrompt:
    """A fully rendered prompt: system instructions plus the user's message."""
    system: str
    user: str

    def to_messages(self) -> list[dict[str, str]]:
        """Convert to OpenAI chat messages format."""
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def format_tasks(tasks: list[Task]) -> str:
    """Render tasks one per line, or the empty-list placeholder."""
    if not tasks:
        return EMPTY_TASKS_PLACEHOLDER
    return "\n".join(task.render() for task in tasks)


def build_prompt(tasks: list[Task], message: str) -> ChatPrompt:
    """Build the assistant prompt for the current task list and user message."""
    return ChatPrompt(
        system=TASK_ASSISTANT_SYSTEM.format(tasks=format_tasks(tasks)),
        user=message,
    )
