"""
Invariant checks for RotationState.

The checker is a pure predicate: it reports the first broken invariant and
never raises, whatever shape the state is in. Callers decide whether a
violation is fatal (assert_invariants) or only worth logging.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from .errors import InvariantViolationError
from .state import RotationState

MIN_TEAMS = 3


class Violation(str, Enum):
    ON_FIELD_MISSING = "on_field_missing"
    DUPLICATE_QUEUE_ENTRY = "duplicate_queue_entry"
    ON_FIELD_TEAM_QUEUED = "on_field_team_queued"
    TEAM_COUNT_MISMATCH = "team_count_mismatch"
    TOO_FEW_TEAMS = "too_few_teams"


@dataclass(frozen=True)
class InvariantReport:
    """
    Result of an invariant check.

    ok is True when every invariant holds; otherwise violation names the
    first one broken and detail describes it.
    """
    ok: bool
    violation: Optional[Violation] = None
    detail: str = ""

    def __bool__(self) -> bool:
        return self.ok


OK = InvariantReport(ok=True)


def _fail(violation: Violation, detail: str) -> InvariantReport:
    return InvariantReport(ok=False, violation=violation, detail=detail)


def _as_list(value: Any) -> List[Any]:
    try:
        return list(value or ())
    except TypeError:
        return []


def _keys(values: List[Any]) -> List[str]:
    # repr keeps unhashable junk comparable without raising
    return [v if isinstance(v, str) else repr(v) for v in values]


def check_invariants(state: RotationState) -> InvariantReport:
    """
    Check the rotation invariants in order.

    1. Two distinct, non-null team ids on the field
    2. No duplicate queue entries
    3. No on-field team in the queue
    4. On-field plus queue covers every team exactly once
    5. At least MIN_TEAMS teams
    """
    on_field = getattr(state, "on_field", None)
    a_id = getattr(on_field, "a_team_id", None)
    b_id = getattr(on_field, "b_team_id", None)
    queue = _keys(_as_list(getattr(state, "queue", ())))
    teams = _as_list(getattr(state, "teams", ()))
    team_ids = set(_keys([getattr(t, "id", None) for t in teams]))

    if not isinstance(a_id, str) or not isinstance(b_id, str) or not a_id or not b_id:
        return _fail(Violation.ON_FIELD_MISSING, "Must have exactly 2 teams on field")
    if a_id == b_id:
        return _fail(Violation.ON_FIELD_MISSING, f"Same team in both field slots: {a_id}")

    if len(set(queue)) != len(queue):
        return _fail(Violation.DUPLICATE_QUEUE_ENTRY, "Queue contains duplicates")

    if a_id in queue or b_id in queue:
        return _fail(Violation.ON_FIELD_TEAM_QUEUED, "On-field team found in queue")

    accounted = {a_id, b_id, *queue}
    if len(accounted) != len(teams) or accounted != team_ids:
        return _fail(
            Violation.TEAM_COUNT_MISMATCH,
            f"Team count mismatch ({len(accounted)} vs {len(teams)})",
        )

    if len(teams) < MIN_TEAMS:
        return _fail(Violation.TOO_FEW_TEAMS, f"Must have at least {MIN_TEAMS} teams")

    return OK


def assert_invariants(state: RotationState) -> None:
    """
    Raise if any invariant is broken.

    Raises:
        InvariantViolationError: With the failing report attached
    """
    report = check_invariants(state)
    if not report.ok:
        raise InvariantViolationError(report)
