"""Interfaces module - abstract base classes for external dependencies."""

from smart_tasks.interfaces.storage import TaskStorage
from smart_tasks.interfaces.identity import IdentityListener, IdentityProvider

__all__ = [
    "TaskStorage",
    "IdentityListener",
    "IdentityProvider",
]
