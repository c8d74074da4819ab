"""
Match commands: winner, tie, undo
"""

import typer

from nexturno.controller import SessionController
from nexturno.core import DeclareTie, DeclareWinner, Undo, can_declare_tie, tie_is_ambiguous

from .._session import open_controller, report, require_session
from ..render import console


def resolve_team(controller: SessionController, ref: str) -> str:
    """
    Map A/B, a team name or a team id to a team id.

    Unresolved references are returned unchanged so the reducer rejects them.
    """
    state = controller.state
    key = ref.strip()
    if key.upper() == "A":
        return state.on_field.a_team_id
    if key.upper() == "B":
        return state.on_field.b_team_id
    for team in state.teams:
        if key == team.id or key.lower() == team.name.lower():
            return team.id
    return key


def winner_command(
    team: str = typer.Argument(..., help="A, B, a team name or a team id"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Declare the winner of the current match.

    Examples:
        nexturno winner A
        nexturno winner "Team 3"
    """
    controller = open_controller()
    require_session(controller, json_output)
    event = DeclareWinner(winner_team_id=resolve_team(controller, team))
    report(controller.dispatch(event), json_output)


def tie_command(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Declare the current match a tie; both teams go to the back of the queue.
    """
    controller = open_controller()
    require_session(controller, json_output)
    if not json_output and tie_is_ambiguous(controller.state) and not can_declare_tie(controller.state):
        console.print("[yellow]With 3 teams a tie cannot rotate; pick the team that stays on.[/yellow]")
    report(controller.dispatch(DeclareTie()), json_output)


def undo_command(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Undo the last result (up to 3 steps back).
    """
    controller = open_controller()
    require_session(controller, json_output)
    report(controller.dispatch(Undo()), json_output)
