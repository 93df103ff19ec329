"""System clock adapter."""

import time


class SystemClock:
    """Clock reading the host's wall time."""

    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000


__all__ = ["SystemClock"]
