"""
Persisted session records.

A record is the canonical JSON of the state plus its last-active time and
a SHA-256 of the state bytes, so a torn or edited copy is detected on load.
"""

import hashlib
import json
import math
from dataclasses import dataclass
from typing import Union

from ..core.canonical import canonical_json_bytes, canonical_json_str
from ..core.errors import CorruptSnapshotError
from ..core.invariants import Violation, check_invariants
from ..core.state import RotationState

RECORD_VERSION = 1


@dataclass(frozen=True)
class SessionRecord:
    """
    Decoded record.

    Fields:
        version: Record format version
        last_active_at: Milliseconds since the epoch at last save
        state_hash: SHA-256 of the canonical state bytes
        state: The rotation state
    """
    version: int
    last_active_at: int
    state_hash: str
    state: RotationState


def serialize_state(state: RotationState) -> bytes:
    """Canonical bytes of a state (same state, same bytes)."""
    return canonical_json_bytes(state.to_dict())


def compute_state_hash(state: RotationState) -> str:
    return hashlib.sha256(serialize_state(state)).hexdigest()


def encode_record(state: RotationState, last_active_at: int) -> str:
    return canonical_json_str({
        "version": RECORD_VERSION,
        "lastActiveAt": last_active_at,
        "stateHash": compute_state_hash(state),
        "state": state.to_dict(),
    })


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_record(raw: Union[str, bytes]) -> SessionRecord:
    """
    Decode and validate a stored record.

    Raises:
        CorruptSnapshotError: If the record is not valid JSON, misses a
            required field, its state does not match stateHash, or the state
            breaks the rotation invariants (a 2-team session is allowed)
    """
    try:
        data = json.loads(raw)
    except ValueError as ex:
        raise CorruptSnapshotError(f"unreadable record: {ex}") from ex

    if not isinstance(data, dict):
        raise CorruptSnapshotError("record is not an object")
    if not _is_int(data.get("version")):
        raise CorruptSnapshotError("record version missing or not an integer")
    last_active_at = data.get("lastActiveAt")
    if not (_is_int(last_active_at) or isinstance(last_active_at, float)):
        raise CorruptSnapshotError("lastActiveAt missing or not a number")
    if isinstance(last_active_at, float) and not math.isfinite(last_active_at):
        raise CorruptSnapshotError(f"lastActiveAt is not finite: {last_active_at}")

    try:
        state = RotationState.from_dict(data["state"])
    except (KeyError, TypeError, ValueError, AttributeError) as ex:
        raise CorruptSnapshotError(f"invalid state: {ex!r}") from ex

    state_hash = data.get("stateHash")
    if state_hash != compute_state_hash(state):
        raise CorruptSnapshotError("state hash mismatch")

    # 2-team sessions are saved legitimately and only fail the team minimum
    report = check_invariants(state)
    if not report.ok and report.violation != Violation.TOO_FEW_TEAMS:
        raise CorruptSnapshotError(f"inconsistent state: {report.detail}")

    return SessionRecord(
        version=data["version"],
        last_active_at=int(last_active_at),
        state_hash=state_hash,
        state=state,
    )
