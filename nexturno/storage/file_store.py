"""
File-based session store.

Keeps two copies of the same record, a primary and a backup, each written
atomically. Load prefers the primary and falls back to the backup when the
primary is unreadable, invalid or stale.
"""

import os
import tempfile
from typing import Optional

from ..core.clock import SystemClock
from ..core.errors import CorruptSnapshotError, SessionStoreError
from ..core.state import RotationState
from ..logging_config import get_logger
from .snapshot import SessionRecord, decode_record, encode_record
from .store import SESSION_TTL_MS, SessionStore

PRIMARY_NAME = "session.primary.json"
BACKUP_NAME = "session.backup.json"

logger = get_logger(__name__)


class FileSessionStore(SessionStore):
    """
    File-backed session store.

    Storage format: one canonical JSON record per file
    {"version": 1, "lastActiveAt": ..., "stateHash": "...", "state": {...}}

    Guarantees:
    - Atomic replace of each copy (temp file, fsync, rename)
    - Invalid or expired copies are removed when encountered
    """

    def __init__(self, directory: str, ttl_ms: int = SESSION_TTL_MS, clock=None) -> None:
        """
        Initialize file session store.

        Args:
            directory: Directory holding the primary and backup files
            ttl_ms: Idle time after which a session is discarded
            clock: Object with now_ms(); defaults to the system clock
        """
        self.directory = directory
        self.ttl_ms = ttl_ms
        self.clock = clock or SystemClock()
        self.primary_path = os.path.join(directory, PRIMARY_NAME)
        self.backup_path = os.path.join(directory, BACKUP_NAME)

    def load(self) -> Optional[RotationState]:
        record = self.load_record()
        return record.state if record else None

    def load_record(self) -> Optional[SessionRecord]:
        """
        Load the freshest valid record, primary first.

        Returns:
            SessionRecord, or None if neither copy is valid and fresh
        """
        record = self._load_and_validate(self.primary_path)
        if record:
            return record
        return self._load_and_validate(self.backup_path)

    def _load_and_validate(self, path: str) -> Optional[SessionRecord]:
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return None
        except OSError as ex:
            logger.error("Error loading session from %s: %s", path, ex)
            self._remove(path)
            return None

        try:
            record = decode_record(raw)
        except CorruptSnapshotError as ex:
            logger.warning("Invalid snapshot at %s: %s", path, ex)
            self._remove(path)
            return None

        age = self.clock.now_ms() - record.last_active_at
        if age > self.ttl_ms:
            logger.info("Session expired at %s (age %d ms)", path, age)
            self._remove(path)
            return None

        return record

    def save(self, state: RotationState) -> None:
        """
        Write state to the primary, then the backup.

        The state counts as saved once the primary is written; a failed
        backup write is logged and leaves the previous backup in place.

        Raises:
            SessionStoreError: If the primary cannot be written
        """
        data = encode_record(state, self.clock.now_ms()).encode("utf-8")
        try:
            os.makedirs(self.directory, exist_ok=True)
            self._write_atomic(self.primary_path, data)
        except OSError as ex:
            raise SessionStoreError(str(ex)) from ex

        try:
            self._write_atomic(self.backup_path, data)
        except OSError as ex:
            logger.error("Backup copy not written to %s: %s", self.backup_path, ex)

    def _write_atomic(self, path: str, data: bytes) -> None:
        fd, tmp_path = tempfile.mkstemp(prefix=".session-", dir=self.directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError:
            self._remove(tmp_path)
            raise

    def clear(self) -> None:
        self._remove(self.primary_path)
        self._remove(self.backup_path)
        logger.info("Session storage cleared")

    def _remove(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as ex:
            logger.error("Error removing %s: %s", path, ex)
