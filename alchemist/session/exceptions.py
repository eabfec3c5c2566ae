class SessionError(Exception):
    """Base exception for session-level errors."""


class OperationSupersededError(SessionError):
    """Raised when an operation finishes after a newer one (or a reset) began.

    Its result is discarded and the session's current result is left alone.
    """
