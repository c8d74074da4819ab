"""
Nexturno

Rotation tracker for pickup games: who is on the field, who is waiting,
and how each result moves the queue along.
"""

__version__ = "0.1.0"
