"""Exception hierarchy for smart-tasks."""


class SmartTasksError(Exception):
    """Base class for all smart-tasks errors."""


class ActionValidationError(SmartTasksError):
    """An action is missing a field its variant requires."""


class TransportError(SmartTasksError):
    """A call to an external collaborator failed."""


class StoreError(TransportError):
    """The task store could not be read or written."""


class CompletionError(TransportError):
    """The language-model provider call failed."""


class AuthMismatchError(SmartTasksError):
    """An operation targeted a user other than the signed-in one.

    Unlike the other errors this one is never degraded to a no-op.
    """


class SessionBusyError(SmartTasksError):
    """A turn is already in flight for this session."""


class SessionNotReadyError(SmartTasksError):
    """No user is signed in to the session."""
