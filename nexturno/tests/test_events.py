"""
Tests for event decoding.
"""

from nexturno.core import DeclareTie, DeclareWinner, Undo, UnknownEvent, event_from_dict, event_to_dict


def test_known_tags_decode():
    assert event_from_dict({"type": "DECLARE_WINNER", "winnerTeamId": "T1"}) == DeclareWinner("T1")
    assert event_from_dict({"type": "DECLARE_TIE"}) == DeclareTie()
    assert event_from_dict({"type": "UNDO"}) == Undo()


def test_unknown_tag_keeps_payload():
    ev = event_from_dict({"type": "RESOLVE_TIE_STAY", "staysTeamId": "T2"})
    assert ev == UnknownEvent(type="RESOLVE_TIE_STAY", payload={"staysTeamId": "T2"})
    assert event_to_dict(ev) == {"type": "RESOLVE_TIE_STAY", "staysTeamId": "T2"}


def test_missing_tag_is_unknown():
    assert isinstance(event_from_dict({}), UnknownEvent)


def test_encode_shapes():
    assert event_to_dict(DeclareWinner("T9")) == {"type": "DECLARE_WINNER", "winnerTeamId": "T9"}
    assert event_to_dict(DeclareTie()) == {"type": "DECLARE_TIE"}
    assert event_to_dict(Undo()) == {"type": "UNDO"}
