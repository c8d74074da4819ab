"""
Replay: rebuild a rotation by folding events through the reducer.
"""

from .runner import ReplayResult, replay

__all__ = [
    "ReplayResult",
    "replay",
]
