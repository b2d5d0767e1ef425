"""
Day counter - the process-wide day number.

The counter lives outside any save fragment. The save engine snapshots
it into each directory and sets it back on bootstrap and reset.
"""

from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)


class DayCounter:
    """
    Counts in-game days.

    Usage:
        days = DayCounter()
        days.on_new_day(lambda day: sync.increment_days_since())
        days.advance()
    """

    def __init__(self, day: int = 0):
        self._day = day
        self._listeners: list[Callable[[int], None]] = []

    @property
    def day(self) -> int:
        return self._day

    def set_day(self, day: int) -> None:
        """Set the day directly (bootstrap and reset use this)."""
        if day < 0:
            raise ValueError(f"Day cannot be negative: {day}")
        self._day = day

    def on_new_day(self, callback: Callable[[int], None]) -> None:
        """Call ``callback(day)`` after every advance."""
        self._listeners.append(callback)

    def advance(self) -> int:
        """Move to the next day and notify listeners."""
        self._day += 1
        logger.info(f"Day {self._day} begins")
        for callback in self._listeners:
            callback(self._day)
        return self._day
