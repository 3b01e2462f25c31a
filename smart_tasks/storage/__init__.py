"""Storage implementations."""

from smart_tasks.storage.json_storage import JSONTaskStorage

__all__ = [
    "JSONTaskStorage",
]
