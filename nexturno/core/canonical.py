"""
Canonical serialization.

Persisted records and state hashes go through these functions so the same
state always produces the same bytes.
"""

import json
from enum import Enum
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert a state value or nested dict/list to canonical plain data.

    Rules:
    - objects exposing to_dict() are expanded first
    - enums collapse to their value
    - dict keys sorted, tuples become lists
    """
    if hasattr(obj, "to_dict"):
        return canonicalize(obj.to_dict())
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic UTF-8 JSON bytes, compact separators and sorted keys.
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")
