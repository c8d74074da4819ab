"""
Tests for the file session store.

Critical tests:
1. Save/load round trip
2. Staleness (24h) with eager discard
3. Fallback to backup when the primary is corrupt
4. Clear
"""

import itertools
import json
import os

import pytest

from nexturno.core import (
    DeclareWinner,
    FixedClock,
    OnField,
    RotationState,
    SessionStoreError,
    Team,
    apply_event,
    create_session,
)
from nexturno.storage import SESSION_TTL_MS, FileSessionStore, compute_state_hash, decode_record, encode_record
from nexturno.storage.file_store import BACKUP_NAME, PRIMARY_NAME
from nexturno.core.errors import CorruptSnapshotError

NOW = 1_700_000_000_000


def _session(n=4):
    counter = itertools.count(1)
    return create_session(n, goal_cap=3, team_colors={0: "red"}, id_factory=lambda: f"T{next(counter)}")


def _played():
    s = _session()
    s = apply_event(s, DeclareWinner("T1"))
    return apply_event(s, DeclareWinner("T3"))


def test_round_trip(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _played()

    store.save(state)
    loaded = store.load()

    assert loaded == state
    assert store.has_active_session()
    assert store.load_record().last_active_at == NOW


def test_save_writes_primary_and_backup(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    store.save(_session())

    primary = (tmp_path / PRIMARY_NAME).read_text()
    backup = (tmp_path / BACKUP_NAME).read_text()
    assert primary == backup
    rec = json.loads(primary)
    assert rec["version"] == 1
    assert rec["lastActiveAt"] == NOW
    assert rec["stateHash"] == compute_state_hash(_session())


def test_missing_session_is_none(tmp_path):
    store = FileSessionStore(str(tmp_path / "nothing"))
    assert store.load() is None
    assert not store.has_active_session()


def test_within_ttl_loads(tmp_path):
    FileSessionStore(str(tmp_path), clock=FixedClock(NOW)).save(_session())
    later = FileSessionStore(str(tmp_path), clock=FixedClock(NOW).advance(SESSION_TTL_MS))

    assert later.load() == _session()


def test_expired_session_discarded(tmp_path):
    FileSessionStore(str(tmp_path), clock=FixedClock(NOW)).save(_session())
    later = FileSessionStore(str(tmp_path), clock=FixedClock(NOW).advance(SESSION_TTL_MS + 1))

    assert later.load() is None
    assert not (tmp_path / PRIMARY_NAME).exists()
    assert not (tmp_path / BACKUP_NAME).exists()


def test_corrupt_primary_falls_back_to_backup(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _played()
    store.save(state)

    (tmp_path / PRIMARY_NAME).write_text("{not json")

    assert store.load() == state
    assert not (tmp_path / PRIMARY_NAME).exists()


def test_tampered_primary_fails_hash_and_falls_back(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _session()
    store.save(state)

    rec = json.loads((tmp_path / PRIMARY_NAME).read_text())
    rec["state"]["queue"] = list(reversed(rec["state"]["queue"]))
    (tmp_path / PRIMARY_NAME).write_text(json.dumps(rec))

    assert store.load() == state


def test_both_copies_invalid(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    store.save(_session())
    (tmp_path / PRIMARY_NAME).write_text("[]")
    (tmp_path / BACKUP_NAME).write_text(json.dumps({"version": "1", "lastActiveAt": NOW}))

    assert store.load() is None


def test_clear(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    store.save(_session())

    store.clear()

    assert store.load() is None
    store.clear()


def test_save_failure_raises_store_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = FileSessionStore(str(blocker / "sub"), clock=FixedClock(NOW))

    with pytest.raises(SessionStoreError):
        store.save(_session())


def test_no_temp_files_left_behind(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    store.save(_session())
    store.save(_played())

    assert sorted(os.listdir(tmp_path)) == sorted([PRIMARY_NAME, BACKUP_NAME])


def test_encode_is_deterministic():
    state = _played()
    assert len({encode_record(state, NOW) for _ in range(50)}) == 1


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "null",
        json.dumps({"version": 1}),
        json.dumps({"version": True, "lastActiveAt": NOW, "state": {}}),
        json.dumps({"version": 1, "lastActiveAt": "yesterday", "state": {}}),
        json.dumps({"version": 1, "lastActiveAt": NOW, "state": {"teams": []}}),
        '{"version": 1, "lastActiveAt": NaN, "state": {}}',
        '{"version": 1, "lastActiveAt": Infinity, "state": {}}',
        '{"version": 1, "lastActiveAt": -Infinity, "state": {}}',
    ],
)
def test_decode_rejects_invalid_records(raw):
    with pytest.raises(CorruptSnapshotError):
        decode_record(raw)


@pytest.mark.parametrize("bad_ts", ["NaN", "Infinity"])
def test_non_finite_timestamp_falls_back_to_backup(tmp_path, bad_ts):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _session()
    store.save(state)

    primary = tmp_path / PRIMARY_NAME
    text = primary.read_text()
    assert f'"lastActiveAt":{NOW}' in text
    primary.write_text(text.replace(f'"lastActiveAt":{NOW}', f'"lastActiveAt":{bad_ts}'))

    assert store.load() == state
    assert not primary.exists()


def test_inconsistent_state_with_valid_hash_rejected():
    broken = RotationState(
        teams=tuple(Team(id=t, name=t) for t in ("T1", "T2", "T3", "T4")),
        on_field=OnField("T1", "T2"),
        queue=("T3", "T3"),
    )

    with pytest.raises(CorruptSnapshotError):
        decode_record(encode_record(broken, NOW))


def test_inconsistent_primary_falls_back_to_backup(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _session()
    store.save(state)

    broken = RotationState(
        teams=state.teams,
        on_field=OnField("T1", "T1"),
        queue=("T2", "T3", "T4"),
    )
    (tmp_path / PRIMARY_NAME).write_text(encode_record(broken, NOW))

    assert store.load() == state


def test_two_team_session_still_loads(tmp_path):
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = create_session(2)
    store.save(state)

    assert store.load() == state


def test_backup_failure_does_not_fail_save(tmp_path):
    (tmp_path / BACKUP_NAME).mkdir()
    store = FileSessionStore(str(tmp_path), clock=FixedClock(NOW))
    state = _played()

    store.save(state)

    assert store.load() == state
    assert not [n for n in os.listdir(tmp_path) if n.startswith(".session-")]
