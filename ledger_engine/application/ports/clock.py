"""Port for reading the current time."""

from typing import Protocol


class ClockPort(Protocol):
    """Source of the current time, injectable for deterministic tests."""

    def now_millis(self) -> int:
        """Return the current time as epoch milliseconds."""


__all__ = ["ClockPort"]
