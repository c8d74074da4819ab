"""
Session persistence.

This module provides:
- SessionStore: Load/save/clear contract with staleness semantics
- FileSessionStore: JSON files with a primary and a backup copy
- Snapshot: Canonical record encoding with a state hash
"""

from .store import SessionStore, SESSION_TTL_MS
from .file_store import FileSessionStore
from .snapshot import SessionRecord, serialize_state, compute_state_hash, encode_record, decode_record

__all__ = [
    "SessionStore",
    "SESSION_TTL_MS",
    "FileSessionStore",
    "SessionRecord",
    "serialize_state",
    "compute_state_hash",
    "encode_record",
    "decode_record",
]
