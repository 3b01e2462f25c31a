"""Internal LLM client wrapper.

Wraps an OpenAI-compatible client (Groq by default) and sends one chat
completion per conversation turn.
"""

from typing import Any

from smart_tasks.errors import CompletionError
from smart_tasks.prompts.builder import ChatPrompt

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 800


class LLMClient:
    """Internal LLM client that handles the action-extraction completion.

    Sampling is kept at a low temperature since the reply must end with a
    machine-readable instruction. Failures are not retried here: repeating
    a generative call can duplicate a list mutation.

    Args:
        client: An async OpenAI client instance (AsyncOpenAI or compatible).
        model: Model identifier to use for completions.
        temperature: Sampling temperature.
        max_tokens: Upper bound on reply length.
    """

    def __init__(
        self,
        client: Any,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(self, prompt: ChatPrompt) -> str:
        """Send the prompt and return the raw reply text.

        Raises:
            CompletionError: If the provider call fails for any reason.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=prompt.to_messages(),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise CompletionError(str(e)) from e

        return content or ""
