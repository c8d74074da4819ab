"""
Rich rendering and JSON payloads for rotation state.
"""

from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from nexturno.core import RotationState, Team, tie_is_ambiguous

console = Console()

# Colors offered at setup mapped to rich styles
COLOR_STYLES = {
    "red": "bold white on red",
    "blue": "bold white on blue",
    "yellow": "bold black on yellow",
    "green": "bold white on green",
    "orange": "bold black on dark_orange",
    "purple": "bold white on purple",
    "pink": "bold black on hot_pink",
    "lime": "bold black on chartreuse1",
}


def team_abbreviation(name: str) -> str:
    """
    Short badge text for a team.

    "Red" -> "RE", "Team 1" -> "T1"
    """
    words = name.strip().split()
    if len(words) <= 1:
        return name.strip()[:2].upper()
    return "".join(w[0] for w in words).upper()


def _badge(team: Optional[Team]) -> str:
    if team is None:
        return "[red]??[/red]"
    abbr = team_abbreviation(team.name)
    style = COLOR_STYLES.get(team.color or "", "bold reverse")
    return f"[{style}] {abbr} [/] {team.name}"


def state_payload(state: RotationState) -> Dict[str, Any]:
    """Plain-data view of a state for --json output."""
    names = {t.id: t.name for t in state.teams}
    return {
        "onField": {
            "a": {"id": state.on_field.a_team_id, "name": names.get(state.on_field.a_team_id)},
            "b": {"id": state.on_field.b_team_id, "name": names.get(state.on_field.b_team_id)},
        },
        "queue": [{"id": tid, "name": names.get(tid)} for tid in state.queue],
        "teams": [t.to_dict() for t in state.teams],
        "phase": state.phase.value,
        "goalCap": state.rules.goal_cap,
        "undoDepth": len(state.undo),
    }


def render_state(state: RotationState) -> None:
    match = Table(title="Current Match", show_header=False, box=None)
    match.add_column(justify="right")
    match.add_column(justify="center", style="dim")
    match.add_column(justify="left")
    match.add_row(
        _badge(state.team(state.on_field.a_team_id)),
        "vs",
        _badge(state.team(state.on_field.b_team_id)),
    )
    console.print(match)

    if not state.queue:
        console.print("[dim]No teams in queue[/dim]")
    else:
        queue = Table(title="Up Next")
        queue.add_column("#", style="cyan", justify="right")
        queue.add_column("Team")
        for pos, tid in enumerate(state.queue, start=1):
            queue.add_row(str(pos), _badge(state.team(tid)))
        console.print(queue)

    cap = state.rules.goal_cap
    console.print(f"Goal cap: [bold]{cap if cap is not None else 'none'}[/bold]")
    console.print(f"Undo available: [bold]{len(state.undo)}[/bold]")
    if tie_is_ambiguous(state):
        console.print(
            "[yellow]3 teams: a tie has no fourth team to bring on; declare a winner instead.[/yellow]"
        )
