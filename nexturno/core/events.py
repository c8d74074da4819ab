"""
Rotation events.

Events form a closed tagged union. Stored or incoming events arrive as
tagged dicts ({"type": "DECLARE_WINNER", "winnerTeamId": "..."}); tags this
version does not know decode to UnknownEvent instead of failing, so older
and newer event shapes can share a log.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Union

DECLARE_WINNER = "DECLARE_WINNER"
DECLARE_TIE = "DECLARE_TIE"
UNDO = "UNDO"


@dataclass(frozen=True)
class DeclareWinner:
    """The named on-field team won the match."""
    winner_team_id: str
    type: ClassVar[str] = DECLARE_WINNER


@dataclass(frozen=True)
class DeclareTie:
    """Both on-field teams tied."""
    type: ClassVar[str] = DECLARE_TIE


@dataclass(frozen=True)
class Undo:
    """Restore the most recent snapshot."""
    type: ClassVar[str] = UNDO


@dataclass(frozen=True)
class UnknownEvent:
    """An event whose tag this version does not recognise."""
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)


Event = Union[DeclareWinner, DeclareTie, Undo, UnknownEvent]


def event_from_dict(data: Dict[str, Any]) -> Event:
    """
    Decode a tagged dict into an Event.

    Unrecognised tags, and known tags with a missing payload, become
    UnknownEvent so the reducer can treat them as no-ops.
    """
    data = dict(data or {})
    tag = str(data.pop("type", ""))

    if tag == DECLARE_WINNER and isinstance(data.get("winnerTeamId"), str):
        return DeclareWinner(winner_team_id=data["winnerTeamId"])
    if tag == DECLARE_TIE:
        return DeclareTie()
    if tag == UNDO:
        return Undo()
    return UnknownEvent(type=tag, payload=data)


def event_to_dict(event: Event) -> Dict[str, Any]:
    if isinstance(event, DeclareWinner):
        return {"type": DECLARE_WINNER, "winnerTeamId": event.winner_team_id}
    if isinstance(event, UnknownEvent):
        return {"type": event.type, **event.payload}
    return {"type": event.type}
