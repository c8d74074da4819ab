"""
Tests for replay determinism.

Critical: Replay must produce identical state across multiple runs.
"""

import itertools

from nexturno.core import (
    DeclareTie,
    DeclareWinner,
    Undo,
    UnknownEvent,
    apply_event,
    canonical_json_str,
    create_session,
    event_from_dict,
)
from nexturno.replay import replay


def _session(n):
    counter = itertools.count(1)
    return create_session(n, id_factory=lambda: f"T{next(counter)}")


EVENTS = [
    DeclareWinner("T1"),
    DeclareWinner("T3"),
    DeclareTie(),
    DeclareWinner("T9"),
    Undo(),
    UnknownEvent(type="RESOLVE_TIE_STAY"),
]


def test_replay_determinism_100_runs():
    s0 = _session(5)
    results = {canonical_json_str(replay(s0, EVENTS).state) for _ in range(100)}
    assert len(results) == 1


def test_replay_counts():
    result = replay(_session(5), EVENTS)

    # T9 is never on field; the unknown event is a no-op
    assert result.applied == 4
    assert result.rejected == 2


def test_replay_matches_stepwise_application():
    s = _session(5)
    for ev in EVENTS:
        s = apply_event(s, ev)

    assert replay(_session(5), EVENTS).state == s


def test_replay_empty_returns_initial():
    s0 = _session(4)
    result = replay(s0, [])

    assert result.state is s0
    assert result.applied == 0
    assert result.rejected == 0


def test_replay_from_stored_dicts():
    stored = [
        {"type": "DECLARE_WINNER", "winnerTeamId": "T1"},
        {"type": "DECLARE_TIE"},
    ]
    result = replay(_session(4), [event_from_dict(d) for d in stored])

    assert result.state.on_field.ids() == ("T4", "T2")
    assert result.state.queue == ("T1", "T3")
