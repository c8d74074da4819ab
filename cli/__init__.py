"""
Nexturno CLI - pickup game rotation tracker

Commands:
- nexturno new/show/clear - Session setup and display
- nexturno winner/tie/undo - Record match results
- nexturno replay - Apply a file of events to the current session
"""

__version__ = "0.1.0"
