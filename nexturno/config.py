"""
Runtime settings read from the environment.

Environment Variables:
    NEXTURNO_HOME: Directory for the persisted session - default: ~/.nexturno
    NEXTURNO_VERIFY_INVARIANTS: Check invariants after every transition - default: on
    NEXTURNO_LOG_LEVEL: Log level - default: WARNING
    NEXTURNO_LOG_FORMAT: json or text - default: text
"""

import os
from dataclasses import dataclass

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key)
    if val is None or not val.strip():
        return default
    return val.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    home: str
    verify_invariants: bool = True
    log_level: str = "WARNING"
    log_format: str = "text"

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            home=os.getenv("NEXTURNO_HOME") or os.path.join(os.path.expanduser("~"), ".nexturno"),
            verify_invariants=_env_bool("NEXTURNO_VERIFY_INVARIANTS", True),
            log_level=os.getenv("NEXTURNO_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("NEXTURNO_LOG_FORMAT", "text").lower(),
        )
