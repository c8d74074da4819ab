"""
Session controller: the seam between a user interface and the core.

Loads or creates the session, runs each event through the reducer and
persists the result. A failed save does not undo the transition; the
in-memory state stays authoritative and the failure is reported back.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .core.errors import NoActiveSessionError, SessionStoreError
from .core.events import Event
from .core.ids import session_fingerprint
from .core.reducer import Reducer, TransitionResult
from .core.session import create_session
from .core.state import RotationState
from .logging_config import get_logger
from .storage.store import SessionStore


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of dispatching an event.

    Fields:
        transition: Reducer result
        persisted: Whether the new state reached storage
        error: Storage error message when persisted is False after a change
    """
    transition: TransitionResult
    persisted: bool
    error: Optional[str] = None

    @property
    def state(self) -> RotationState:
        return self.transition.state

    @property
    def applied(self) -> bool:
        return self.transition.applied


class SessionController:
    """
    Usage:
        controller = SessionController(FileSessionStore(path))
        if controller.resume() is None:
            controller.start(team_count=4)
        outcome = controller.dispatch(DeclareTie())
    """

    def __init__(self, store: SessionStore, verify: bool = True) -> None:
        self.store = store
        self.reducer = Reducer(verify=verify)
        self.state: Optional[RotationState] = None

    def _logger(self):
        session_id = session_fingerprint(self.state.team_ids()) if self.state else None
        return get_logger(__name__, session_id=session_id)

    def resume(self) -> Optional[RotationState]:
        """Load the persisted session; None routes the caller to setup."""
        self.state = self.store.load()
        return self.state

    def start(
        self,
        team_count: int,
        goal_cap: Optional[int] = None,
        team_colors: Optional[Mapping[int, str]] = None,
    ) -> DispatchOutcome:
        """Replace any existing session with a fresh one and save it."""
        state = create_session(team_count, goal_cap=goal_cap, team_colors=team_colors)
        self.store.clear()
        self.state = state
        self._logger().info("Session started with %d teams", team_count)
        return self._persist(TransitionResult(state=self.state, applied=True))

    def dispatch(self, event: Event) -> DispatchOutcome:
        """
        Apply event to the current session and save the result.

        Raises:
            NoActiveSessionError: If no session is loaded
            InvariantViolationError: If verification is on and the reducer
                produced an inconsistent state
        """
        if self.state is None:
            raise NoActiveSessionError("No active session")

        result = self.reducer.apply(self.state, event)
        if not result.applied:
            self._logger().warning(
                "Transition %s rejected: %s", event.type, result.detail or result.rejection
            )
            return DispatchOutcome(transition=result, persisted=False)

        self.state = result.state
        self._logger().debug("Transition %s applied", event.type)
        return self._persist(result)

    def _persist(self, result: TransitionResult) -> DispatchOutcome:
        try:
            self.store.save(result.state)
        except SessionStoreError as ex:
            self._logger().error("Session not saved: %s", ex)
            return DispatchOutcome(transition=result, persisted=False, error=str(ex))
        return DispatchOutcome(transition=result, persisted=True)

    def end(self) -> None:
        """Clear the persisted session."""
        self.store.clear()
        self._logger().info("Session cleared")
        self.state = None
