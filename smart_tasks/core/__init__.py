"""Core module - internal components."""

from smart_tasks.core.llm import LLMClient
from smart_tasks.core.store import TaskStoreClient
from smart_tasks.core.extractor import ExtractedReply, extract_action
from smart_tasks.core.dispatcher import ActionDispatcher

__all__ = [
    "LLMClient",
    "TaskStoreClient",
    "ExtractedReply",
    "extract_action",
    "ActionDispatcher",
]
