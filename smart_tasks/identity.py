"""In-process identity provider.

Used by the CLI and tests where sign-in happens locally rather than
through an external authentication service.
"""

from smart_tasks.interfaces.identity import IdentityProvider


class LocalIdentityProvider(IdentityProvider):
    """Identity provider driven by explicit sign_in/sign_out calls."""

    def __init__(self, user_id: str | None = None) -> None:
        super().__init__()
        self._user_id = user_id

    @property
    def current_user_id(self) -> str | None:
        return self._user_id

    async def sign_in(self, user_id: str) -> None:
        """Sign in as ``user_id`` and notify listeners."""
        if not user_id:
            raise ValueError("user_id must be non-empty")
        self._user_id = user_id
        await self._notify(user_id)

    async def sign_out(self) -> None:
        """Sign out and notify listeners."""
        self._user_id = None
        await self._notify(None)
