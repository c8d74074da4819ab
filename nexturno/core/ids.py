"""
Identifier helpers.

Team ids are random and generated only at session creation; transitions
never mint ids. Fingerprints are derived, not random.
"""

import hashlib
import uuid
from typing import Iterable


def new_team_id() -> str:
    """Fresh opaque team id (uuid4)."""
    return str(uuid.uuid4())


def stable_id(*parts: str) -> str:
    """
    Stable SHA-256 id derived from inputs (no randomness).

    Example:
        stable_id("team", "1") -> "5f1c..."
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def session_fingerprint(team_ids: Iterable[str]) -> str:
    """Short stable tag for a session, used to correlate log lines."""
    return stable_id("session", *team_ids)[:12]
