"""
SessionStore abstract interface.

Defines the contract the presentation layer uses to keep a session across
reloads. The core never calls a store; callers persist after transitions.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..core.state import RotationState

# Sessions idle longer than this are treated as absent
SESSION_TTL_MS = 24 * 60 * 60 * 1000


class SessionStore(ABC):
    """
    Abstract session storage.

    All implementations must guarantee:
    - load() never returns a stale or invalid state (None instead)
    - save() either writes the state durably or raises
    - clear() leaves no loadable session behind
    """

    @abstractmethod
    def load(self) -> Optional[RotationState]:
        """
        Load the current session.

        Returns:
            The persisted state, or None when absent or stale
        """
        ...

    @abstractmethod
    def save(self, state: RotationState) -> None:
        """
        Persist state and refresh its last-active timestamp.

        Raises:
            SessionStoreError: If the write fails
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove the persisted session."""
        ...

    def has_active_session(self) -> bool:
        return self.load() is not None
