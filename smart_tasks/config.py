"""Runtime settings for smart-tasks, read from the environment."""

import os
from dataclasses import dataclass
from typing import Any

from smart_tasks.core.llm import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TEMPERATURE

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"


@dataclass
class Settings:
    """Settings shared by the server and the interactive chat.

    Attributes:
        api_key: Provider API key. None lets the OpenAI client use its own lookup.
        base_url: OpenAI-compatible API base URL.
        model: Chat model identifier.
        temperature: Sampling temperature for action extraction.
        max_tokens: Reply length bound.
        storage_path: JSON file backing the task store.
        max_attempts: Store attempts per operation.
        retry_delay: Base store backoff in seconds.
    """
    api_key: str | None = None
    base_url: str | None = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    storage_path: str = "./todos.json"
    max_attempts: int = 3
    retry_delay: float = 1.0

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> "Settings":
        """Build settings from ``os.environ`` overlaid with ``env``."""
        e: dict[str, Any] = dict(os.environ)
        if env:
            e.update(env)

        return cls(
            api_key=(
                e.get("SMART_TASKS_API_KEY")
                or e.get("GROQ_API_KEY")
                or e.get("OPENAI_API_KEY")
            ),
            base_url=e.get("SMART_TASKS_BASE_URL") or DEFAULT_BASE_URL,
            model=e.get("SMART_TASKS_MODEL") or DEFAULT_MODEL,
            temperature=_number(e.get("SMART_TASKS_TEMPERATURE"), float, DEFAULT_TEMPERATURE),
            max_tokens=_number(e.get("SMART_TASKS_MAX_TOKENS"), int, DEFAULT_MAX_TOKENS),
            storage_path=e.get("SMART_TASKS_STORAGE") or "./todos.json",
            max_attempts=max(1, _number(e.get("SMART_TASKS_MAX_ATTEMPTS"), int, 3)),
            retry_delay=max(0.0, _number(e.get("SMART_TASKS_RETRY_DELAY"), float, 1.0)),
        )

    def client_kwargs(self) -> dict[str, str]:
        """Keyword arguments for ``AsyncOpenAI``."""
        kwargs = {}
        if self.base_url:
            kwargs["base_url"] = self.base_url
        if self.api_key:
            kwargs["api_key"] = self.api_key
        return kwargs


def _number(raw: str | None, kind: type, default: Any) -> Any:
    if raw is None or not str(raw).strip():
        return default
    try:
        return kind(str(raw).strip())
    except ValueError:
        return default
