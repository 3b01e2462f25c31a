"""Abstract identity provider interface."""

import inspect
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

IdentityListener = Callable[[str | None], Awaitable[None] | None]


class IdentityProvider(ABC):
    """Source of the signed-in user's identity.

    The identifier is opaque and stable for a given user. Listeners receive
    the new user id on sign-in and None on sign-out; they may be sync or
    async.
    """

    def __init__(self) -> None:
        self._listeners: list[IdentityListener] = []

    @property
    @abstractmethod
    def current_user_id(self) -> str | None:
        """The signed-in user's id, or None when signed out."""
        ...

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener for identity changes.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self, user_id: str | None) -> None:
        for listener in list(self._listeners):
            result = listener(user_id)
            if inspect.isawaitable(result):
                await result
