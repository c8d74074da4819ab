"""
Exception types for the rotation engine.
"""


class NexturnoError(Exception):
    """Base class for all nexturno errors."""
    pass


class InvariantViolationError(NexturnoError):
    """Raised when a transition produced a state that breaks the data model."""

    def __init__(self, report) -> None:
        super().__init__(f"Invariant violation: {report.detail}")
        self.report = report


class RejectedTransition(NexturnoError):
    """
    Raised by event handlers when a precondition fails.

    Never escapes Reducer.apply; it is turned into a rejected TransitionResult.
    """

    def __init__(self, rejection, detail: str = "") -> None:
        super().__init__(detail or rejection.value)
        self.rejection = rejection
        self.detail = detail


class SessionStoreError(NexturnoError):
    """Raised when a session cannot be written to storage."""
    pass


class CorruptSnapshotError(NexturnoError):
    """Raised when a persisted session record cannot be decoded."""
    pass


class NoActiveSessionError(NexturnoError):
    """Raised when an event is dispatched with no session loaded."""
    pass
