"""
Session factory: build the opening rotation from setup choices.
"""

from typing import Callable, Mapping, Optional

from .ids import new_team_id
from .state import OnField, Phase, Rules, RotationState, Team

# Choices offered by the setup form. The factory does not enforce them.
TEAM_COUNT_OPTIONS = (2, 3, 4, 5, 6, 8)
GOAL_CAP_OPTIONS = (1, 3, 5)
NO_COLOR = "no-color"
COLOR_OPTIONS = (NO_COLOR, "red", "blue", "yellow", "green", "orange", "purple", "pink", "lime")


def normalize_color(value: Optional[str]) -> Optional[str]:
    """Map the form's color value to the stored one (None for no color)."""
    if not value or value == NO_COLOR:
        return None
    return value


def create_session(
    team_count: int,
    goal_cap: Optional[int] = None,
    team_colors: Optional[Mapping[int, str]] = None,
    id_factory: Callable[[], str] = new_team_id,
) -> RotationState:
    """
    Create the initial RotationState for a new session.

    Teams are named "Team 1".."Team N" in creation order. The first two go
    on the field (A, B); the rest queue up in the same order.

    Args:
        team_count: Number of teams. 2 is accepted but cannot rotate.
        goal_cap: Goals needed to win, or None for no cap. Stored verbatim.
        team_colors: Zero-based team index -> color value
        id_factory: Source of fresh team ids

    Raises:
        ValueError: If team_count is below 2
    """
    if team_count < 2:
        raise ValueError(f"team_count must be at least 2, got {team_count}")

    colors = team_colors or {}
    teams = tuple(
        Team(id=id_factory(), name=f"Team {i + 1}", color=normalize_color(colors.get(i)))
        for i in range(team_count)
    )
    first, second = teams[0], teams[1]

    return RotationState(
        teams=teams,
        on_field=OnField(a_team_id=first.id, b_team_id=second.id),
        queue=tuple(t.id for t in teams[2:]),
        phase=Phase.NORMAL,
        rules=Rules(goal_cap=goal_cap),
        undo=(),
    )
