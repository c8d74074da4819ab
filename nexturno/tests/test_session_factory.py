"""
Tests for the session factory.
"""

import itertools

import pytest

from nexturno.core import Phase, check_invariants, create_session


def _ids():
    counter = itertools.count(1)
    return lambda: f"T{next(counter)}"


def test_first_two_on_field_rest_queued_in_order():
    s = create_session(5, id_factory=_ids())

    assert [t.name for t in s.teams] == ["Team 1", "Team 2", "Team 3", "Team 4", "Team 5"]
    assert s.on_field.a_team_id == "T1"
    assert s.on_field.b_team_id == "T2"
    assert s.queue == ("T3", "T4", "T5")
    assert s.undo == ()
    assert s.phase is Phase.NORMAL
    assert s.version == 1


@pytest.mark.parametrize("n", [3, 4, 5, 6, 8])
def test_factory_output_passes_invariants(n):
    report = check_invariants(create_session(n))
    assert report.ok, report.detail


def test_default_ids_are_unique():
    s = create_session(8)
    ids = s.team_ids()
    assert len(set(ids)) == 8
    assert all(isinstance(i, str) and i for i in ids)


def test_goal_cap_stored_verbatim():
    assert create_session(4, goal_cap=3).rules.goal_cap == 3
    assert create_session(4).rules.goal_cap is None


def test_colors_normalized():
    s = create_session(4, team_colors={0: "red", 1: "no-color", 3: ""}, id_factory=_ids())
    assert [t.color for t in s.teams] == ["red", None, None, None]


def test_two_teams_accepted_but_fail_team_minimum():
    s = create_session(2, id_factory=_ids())
    assert s.queue == ()
    report = check_invariants(s)
    assert not report.ok
    assert report.violation.value == "too_few_teams"


def test_fewer_than_two_teams_rejected():
    with pytest.raises(ValueError):
        create_session(1)


def test_factory_is_pure_apart_from_ids():
    a = create_session(4, goal_cap=5, id_factory=_ids())
    b = create_session(4, goal_cap=5, id_factory=_ids())
    assert a == b
