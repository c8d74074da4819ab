"""
Session commands: new, show, clear
"""

import json
from typing import Dict, List, Optional

import typer

from nexturno.core import COLOR_OPTIONS, GOAL_CAP_OPTIONS, TEAM_COUNT_OPTIONS

from .._session import open_controller, report, require_session
from ..render import console, render_state, state_payload


def _parse_colors(values: List[str], team_count: int) -> Dict[int, str]:
    """Parse "N=color" pairs (N is 1-based) into index -> color."""
    colors: Dict[int, str] = {}
    for raw in values:
        number, sep, color = raw.partition("=")
        if not sep or not number.strip().isdigit():
            raise typer.BadParameter(f"expected TEAM=COLOR, got {raw!r}", param_hint="--color")
        idx = int(number) - 1
        color = color.strip().lower()
        if not 0 <= idx < team_count:
            raise typer.BadParameter(f"no team {number} in a {team_count}-team session", param_hint="--color")
        if color not in COLOR_OPTIONS:
            raise typer.BadParameter(
                f"unknown color {color!r} (choose from {', '.join(COLOR_OPTIONS)})", param_hint="--color"
            )
        colors[idx] = color
    return colors


def new_command(
    teams: int = typer.Option(4, "--teams", "-t", help="Number of teams"),
    goal_cap: Optional[int] = typer.Option(None, "--goal-cap", "-g", help="Goals needed to win"),
    color: List[str] = typer.Option([], "--color", "-c", help="Team color as TEAM=COLOR, repeatable"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Replace an active session without asking"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Start a new session.

    Examples:
        nexturno new
        nexturno new --teams 5 --goal-cap 3
        nexturno new -t 3 -c 1=red -c 2=blue
    """
    if teams not in TEAM_COUNT_OPTIONS:
        raise typer.BadParameter(
            f"choose from {', '.join(map(str, TEAM_COUNT_OPTIONS))}", param_hint="--teams"
        )
    if goal_cap is not None and goal_cap not in GOAL_CAP_OPTIONS:
        raise typer.BadParameter(
            f"choose from {', '.join(map(str, GOAL_CAP_OPTIONS))}", param_hint="--goal-cap"
        )
    colors = _parse_colors(color, teams)

    controller = open_controller()
    if controller.resume() is not None and not yes:
        typer.confirm("This will wipe the current session. Continue?", abort=True)

    if teams == 2 and not json_output:
        console.print("[yellow]2 teams have no queue: results cannot rotate anyone in.[/yellow]")

    report(controller.start(teams, goal_cap=goal_cap, team_colors=colors), json_output)


def show_command(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the current match and queue.
    """
    controller = open_controller()
    require_session(controller, json_output)

    if json_output:
        print(json.dumps(state_payload(controller.state), indent=2))
    else:
        render_state(controller.state)


def clear_command(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Wipe the current session.
    """
    if not yes:
        typer.confirm("This will wipe the current session. Continue?", abort=True)
    controller = open_controller()
    controller.end()
    console.print("Session cleared")
