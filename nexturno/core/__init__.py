"""
Core rotation primitives.

This module provides the pure parts of a session:
- RotationState: Immutable session aggregate
- Events: Closed set of match outcomes (winner, tie, undo)
- Reducer: Pure state transitions with bounded undo
- Invariants: Total consistency checker
- create_session: Opening rotation from setup choices
"""

from .state import Team, OnField, Rules, Phase, RotationState, SCHEMA_VERSION, UNDO_LIMIT
from .events import DeclareWinner, DeclareTie, Undo, UnknownEvent, Event, event_from_dict, event_to_dict
from .reducer import Reducer, Rejection, TransitionResult, apply_event, can_declare_tie, tie_is_ambiguous
from .invariants import InvariantReport, Violation, check_invariants, assert_invariants
from .session import create_session, normalize_color, COLOR_OPTIONS, GOAL_CAP_OPTIONS, TEAM_COUNT_OPTIONS
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .clock import SystemClock, FixedClock
from .ids import new_team_id, stable_id, session_fingerprint
from .errors import (
    NexturnoError,
    InvariantViolationError,
    RejectedTransition,
    SessionStoreError,
    CorruptSnapshotError,
    NoActiveSessionError,
)

__all__ = [
    "Team",
    "OnField",
    "Rules",
    "Phase",
    "RotationState",
    "SCHEMA_VERSION",
    "UNDO_LIMIT",
    "DeclareWinner",
    "DeclareTie",
    "Undo",
    "UnknownEvent",
    "Event",
    "event_from_dict",
    "event_to_dict",
    "Reducer",
    "Rejection",
    "TransitionResult",
    "apply_event",
    "can_declare_tie",
    "tie_is_ambiguous",
    "InvariantReport",
    "Violation",
    "check_invariants",
    "assert_invariants",
    "create_session",
    "normalize_color",
    "COLOR_OPTIONS",
    "GOAL_CAP_OPTIONS",
    "TEAM_COUNT_OPTIONS",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "SystemClock",
    "FixedClock",
    "new_team_id",
    "stable_id",
    "session_fingerprint",
    "NexturnoError",
    "InvariantViolationError",
    "RejectedTransition",
    "SessionStoreError",
    "CorruptSnapshotError",
    "NoActiveSessionError",
]
