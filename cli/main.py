#!/usr/bin/env python3
"""
Nexturno CLI - pickup game rotation tracker

Main entrypoint for the nexturno command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from nexturno.config import Settings
from nexturno.logging_config import setup_logging

from cli.commands import match, replay, session

# Initialize Typer app
app = typer.Typer(
    name="nexturno",
    help="Track who is on the field and who plays next",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command("new")(session.new_command)
app.command("show")(session.show_command)
app.command("clear")(session.clear_command)
app.command("winner")(match.winner_command)
app.command("tie")(match.tie_command)
app.command("undo")(match.undo_command)
app.command("replay")(replay.replay_command)


@app.callback()
def configure():
    """Configure logging from NEXTURNO_LOG_LEVEL / NEXTURNO_LOG_FORMAT."""
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from nexturno import __version__ as core_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Nexturno CLI[/bold]", f"v{__version__}")
    table.add_row("Core", f"v{core_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
