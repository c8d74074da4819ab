"""
Replay command: apply a file of events to the current session
"""

import json
from typing import Any, List

import typer
from rich.table import Table

from nexturno.core import SessionStoreError, event_from_dict
from nexturno.replay import replay as replay_events

from .._session import EXIT_ERROR, open_controller, require_session
from ..render import console, render_state, state_payload


def _read_events(path: str) -> List[Any]:
    """Events file: a JSON list, or one JSON object per line."""
    with open(path, "r") as f:
        text = f.read()
    stripped = text.strip()
    if stripped.startswith("["):
        return json.loads(stripped)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def replay_command(
    events_path: str = typer.Argument(..., help="Path to events file (JSON list or JSON lines)"),
    save: bool = typer.Option(False, "--save", help="Persist the resulting state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay events on top of the current session.

    Examples:
        nexturno replay events.json
        nexturno replay events.jsonl --save
    """
    controller = open_controller()
    require_session(controller, json_output)

    try:
        events = [event_from_dict(rec) for rec in _read_events(events_path)]
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Events file not found", "path": events_path}))
        else:
            console.print(f"[red]Error: Events file not found:[/red] {events_path}")
        raise typer.Exit(EXIT_ERROR)
    except OSError as e:
        if json_output:
            print(json.dumps({"error": f"Cannot read events file: {e}", "path": events_path}))
        else:
            console.print(f"[red]Error: Cannot read events file:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)
    except (ValueError, TypeError, AttributeError) as e:
        if json_output:
            print(json.dumps({"error": f"Invalid events file: {e}"}))
        else:
            console.print(f"[red]Error: Invalid events file:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    result = replay_events(controller.state, events, reducer=controller.reducer)

    if save:
        try:
            controller.store.save(result.state)
        except SessionStoreError as e:
            if json_output:
                print(json.dumps({"error": f"Session not saved: {e}"}))
            else:
                console.print(f"[red]Error: Session not saved:[/red] {e}")
            raise typer.Exit(EXIT_ERROR)

    if json_output:
        print(json.dumps({
            "applied": result.applied,
            "rejected": result.rejected,
            "saved": save,
            "state": state_payload(result.state),
        }, indent=2))
    else:
        table = Table(title="Replay")
        table.add_column("Applied", style="green", justify="right")
        table.add_column("Rejected", style="red", justify="right")
        table.add_row(str(result.applied), str(result.rejected))
        console.print(table)
        render_state(result.state)
