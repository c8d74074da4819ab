"""
Reducer: pure rotation transitions.

The reducer is the heart of the session. It must be:
- Pure (no side effects, no I/O, no clock, no randomness)
- Deterministic (same state and event -> same result)
- Total (never raises for any event value, known or not)

A failed precondition is not an error: the input state comes back
untouched together with the Rejection reason.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from .errors import RejectedTransition
from .events import DECLARE_TIE, DECLARE_WINNER, UNDO, Event, UnknownEvent
from .invariants import assert_invariants
from .state import OnField, RotationState

# Handler signature: (state, event) -> next state, or raise RejectedTransition
Handler = Callable[[RotationState, Event], RotationState]


class Rejection(str, Enum):
    WINNER_NOT_ON_FIELD = "winner_not_on_field"
    QUEUE_EMPTY = "queue_empty"
    QUEUE_TOO_SHORT = "queue_too_short"
    NOTHING_TO_UNDO = "nothing_to_undo"
    UNKNOWN_EVENT = "unknown_event"


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of applying one event.

    Fields:
        state: Next state (the input object itself when rejected)
        applied: Whether the transition happened
        rejection: Why it did not, when applied is False
        detail: Human-readable diagnostic for the rejection
    """
    state: RotationState
    applied: bool
    rejection: Optional[Rejection] = None
    detail: str = ""


def declare_winner(state: RotationState, event: Event) -> RotationState:
    winner = event.winner_team_id
    if winner not in state.on_field.ids():
        raise RejectedTransition(
            Rejection.WINNER_NOT_ON_FIELD, f"Invalid winner: team {winner!r} not on field"
        )
    if not state.queue:
        # 2-team sessions end up here; rematch loops are not supported
        raise RejectedTransition(Rejection.QUEUE_EMPTY, "Cannot rotate: queue is empty")

    loser = state.on_field.other(winner)
    next_up, rest = state.queue[0], state.queue[1:]

    return replace(
        state,
        on_field=OnField(a_team_id=winner, b_team_id=next_up),
        queue=rest + (loser,),
        undo=state.push_undo(state.snapshot()),
    )


def declare_tie(state: RotationState, event: Event) -> RotationState:
    if len(state.queue) < 2:
        raise RejectedTransition(
            Rejection.QUEUE_TOO_SHORT,
            f"Cannot resolve tie: need 2 queued teams, have {len(state.queue)}",
        )

    first, second, rest = state.queue[0], state.queue[1], state.queue[2:]

    return replace(
        state,
        on_field=OnField(a_team_id=first, b_team_id=second),
        queue=rest + state.on_field.ids(),
        undo=state.push_undo(state.snapshot()),
    )


def undo(state: RotationState, event: Event) -> RotationState:
    if not state.undo:
        raise RejectedTransition(Rejection.NOTHING_TO_UNDO, "Undo history is empty")

    previous, older = state.undo[0], state.undo[1:]
    return replace(previous, undo=older)


class Reducer:
    """
    Registry of event handlers for rotation transitions.

    Usage:
        reducer = Reducer()
        result = reducer.apply(state, DeclareWinner(winner_team_id=team_id))
        if result.applied:
            store.save(result.state)

    With verify=True every applied transition is checked against the
    rotation invariants and InvariantViolationError is raised on failure.
    That only happens if a handler is wrong, never because of user input.
    """

    def __init__(self, verify: bool = True) -> None:
        self.verify = verify
        self._handlers: Dict[str, Handler] = {}
        self.register(DECLARE_WINNER, declare_winner)
        self.register(DECLARE_TIE, declare_tie)
        self.register(UNDO, undo)

    def register(self, event_type: str, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_type: Event tag
            handler: Pure function (state, event) -> next state
        """
        self._handlers[event_type] = handler

    def apply(self, state: RotationState, event: Event) -> TransitionResult:
        """
        Apply event to state.

        Returns:
            TransitionResult; on rejection its state is the input object

        Raises:
            InvariantViolationError: verify is on and the handler produced
                an inconsistent state
        """
        handler = None
        if not isinstance(event, UnknownEvent):
            handler = self._handlers.get(getattr(event, "type", None))
        if handler is None:
            return TransitionResult(
                state=state,
                applied=False,
                rejection=Rejection.UNKNOWN_EVENT,
                detail=f"No handler for event type: {getattr(event, 'type', None)!r}",
            )

        try:
            next_state = handler(state, event)
        except RejectedTransition as ex:
            return TransitionResult(
                state=state, applied=False, rejection=ex.rejection, detail=ex.detail
            )

        if self.verify:
            assert_invariants(next_state)
        return TransitionResult(state=next_state, applied=True)


def apply_event(state: RotationState, event: Event, verify: bool = True) -> RotationState:
    """Apply event and return only the next state."""
    return Reducer(verify=verify).apply(state, event).state


def can_declare_tie(state: RotationState) -> bool:
    return len(state.queue) >= 2


def tie_is_ambiguous(state: RotationState) -> bool:
    """
    True for 3-team sessions, where a tie has no distinct fourth team.

    Presentation-level guidance only; the reducer does not special-case it.
    """
    return len(state.teams) == 3
