"""
Wall-clock sources for session staleness.

Only the persistence layer reads the clock; the reducer never does.
"""

import time
from dataclasses import dataclass


class SystemClock:
    """Milliseconds since the epoch from the system clock."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


@dataclass(frozen=True)
class FixedClock:
    """
    Clock pinned to a given instant.

    Since FixedClock is immutable, advance() returns a new instance.
    """
    current: int = 0

    def now_ms(self) -> int:
        return self.current

    def advance(self, ms: int) -> "FixedClock":
        return FixedClock(self.current + ms)
