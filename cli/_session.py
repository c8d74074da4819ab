"""
Shared plumbing for commands: settings, controller and exit codes.
"""

import json
from typing import Any, Dict

import typer

from nexturno.config import Settings
from nexturno.controller import DispatchOutcome, SessionController
from nexturno.storage import FileSessionStore

from .render import console, render_state, state_payload

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def open_controller() -> SessionController:
    settings = Settings.from_env()
    store = FileSessionStore(settings.home)
    return SessionController(store, verify=settings.verify_invariants)


def require_session(controller: SessionController, json_output: bool) -> None:
    """Load the session or exit with EXIT_ERROR."""
    if controller.resume() is not None:
        return
    if json_output:
        print(json.dumps({"error": "No active session"}))
    else:
        console.print("[yellow]No active session.[/yellow] Run [bold]nexturno new[/bold] to start one.")
    raise typer.Exit(EXIT_ERROR)


def report(outcome: DispatchOutcome, json_output: bool) -> None:
    """Print the outcome and exit with the matching code."""
    if json_output:
        out: Dict[str, Any] = {
            "applied": outcome.applied,
            "rejection": outcome.transition.rejection.value if outcome.transition.rejection else None,
            "persisted": outcome.persisted,
            "error": outcome.error,
            "state": state_payload(outcome.state),
        }
        print(json.dumps(out, indent=2))
    else:
        if not outcome.applied:
            console.print(f"[red]Rejected:[/red] {outcome.transition.detail}")
        elif not outcome.persisted:
            console.print(f"[yellow]Warning: session not saved:[/yellow] {outcome.error}")
        render_state(outcome.state)

    if not outcome.applied:
        raise typer.Exit(EXIT_REJECTED)
    if not outcome.persisted:
        raise typer.Exit(EXIT_ERROR)
    raise typer.Exit(EXIT_OK)
