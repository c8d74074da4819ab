"""
Replay runner: reconstruct state from an event sequence.

Replay is pure: applies the reducer to each event in order. Rejected
events leave the state as it was and are counted, not raised.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.events import Event
from ..core.reducer import Reducer
from ..core.state import RotationState


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of replay operation.

    Fields:
        state: Final state after applying events
        applied: Number of events that changed the state
        rejected: Number of events that were no-ops
    """
    state: RotationState
    applied: int
    rejected: int


def replay(
    initial: RotationState,
    events: Iterable[Event],
    reducer: Optional[Reducer] = None,
) -> ReplayResult:
    """
    Replay events on top of initial.

    Args:
        initial: Starting state (usually a fresh session)
        events: Events in the order they happened
        reducer: Reducer to use (default: Reducer() with verification)

    Returns:
        ReplayResult with final state and counts
    """
    reducer = reducer or Reducer()
    st = initial
    applied = rejected = 0

    for ev in events:
        result = reducer.apply(st, ev)
        st = result.state
        if result.applied:
            applied += 1
        else:
            rejected += 1

    return ReplayResult(state=st, applied=applied, rejected=rejected)
