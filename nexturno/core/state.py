"""
Rotation state model.

RotationState is the single aggregate of a session: the teams, the pair on
the field, the waiting queue and a short history of prior snapshots.
Every value here is frozen; transitions build new instances.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

SCHEMA_VERSION = 1
UNDO_LIMIT = 3


class Phase(str, Enum):
    """
    Informational session phase.

    TIE_DECISION is reserved for a 3-team tie-breaker flow; no transition
    enters or leaves it yet.
    """
    NORMAL = "normal"
    TIE_DECISION = "tieDecision"


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Team":
        return Team(id=str(data["id"]), name=str(data["name"]), color=data.get("color"))


@dataclass(frozen=True)
class OnField:
    """The two teams currently playing. A/B are display slots only."""
    a_team_id: str
    b_team_id: str

    def ids(self) -> Tuple[str, str]:
        return (self.a_team_id, self.b_team_id)

    def other(self, team_id: str) -> str:
        """Return the on-field id that is not team_id."""
        return self.b_team_id if team_id == self.a_team_id else self.a_team_id

    def to_dict(self) -> Dict[str, Any]:
        return {"aTeamId": self.a_team_id, "bTeamId": self.b_team_id}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "OnField":
        return OnField(a_team_id=data["aTeamId"], b_team_id=data["bTeamId"])


@dataclass(frozen=True)
class Rules:
    goal_cap: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"goalCap": self.goal_cap}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Rules":
        data = data or {}
        goal_cap = data.get("goalCap")
        return Rules(goal_cap=int(goal_cap) if goal_cap is not None else None)


@dataclass(frozen=True)
class RotationState:
    """
    Immutable rotation state.

    Fields:
        version: Schema version of the record
        teams: All teams in creation order
        on_field: Pair currently playing
        queue: Waiting team ids, head plays next
        phase: Informational phase tag
        rules: Session rules (goal cap)
        undo: Prior snapshots, most recent first, at most UNDO_LIMIT

    Snapshots stored in undo carry an empty undo of their own.
    """
    teams: Tuple[Team, ...]
    on_field: OnField
    queue: Tuple[str, ...] = ()
    phase: Phase = Phase.NORMAL
    rules: Rules = field(default_factory=Rules)
    undo: Tuple["RotationState", ...] = ()
    version: int = SCHEMA_VERSION

    def team_ids(self) -> Tuple[str, ...]:
        return tuple(t.id for t in self.teams)

    def team(self, team_id: str) -> Optional[Team]:
        for t in self.teams:
            if t.id == team_id:
                return t
        return None

    def snapshot(self) -> "RotationState":
        """Copy of this state without its undo history."""
        return replace(self, undo=())

    def push_undo(self, snapshot: "RotationState") -> Tuple["RotationState", ...]:
        """
        History with snapshot pushed to the front, truncated to UNDO_LIMIT.
        """
        return ((snapshot,) + self.undo)[:UNDO_LIMIT]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "teams": [t.to_dict() for t in self.teams],
            "onField": self.on_field.to_dict(),
            "queue": list(self.queue),
            "phase": self.phase.value,
            "rules": self.rules.to_dict(),
            "undo": [s.to_dict() for s in self.undo],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "RotationState":
        """
        Rebuild a state from its dict form.

        Raises:
            KeyError, TypeError, ValueError: If required fields are missing
                or malformed
        """
        return RotationState(
            version=int(data["version"]),
            teams=tuple(Team.from_dict(t) for t in data["teams"]),
            on_field=OnField.from_dict(data["onField"]),
            queue=tuple(data["queue"]),
            phase=Phase(data.get("phase", Phase.NORMAL.value)),
            rules=Rules.from_dict(data.get("rules", {})),
            undo=tuple(RotationState.from_dict(s) for s in data.get("undo", [])),
        )
