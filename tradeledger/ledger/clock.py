"""Clock and identifier collaborators for the ledger store."""

import time
from datetime import date, timedelta
from typing import Callable, Optional, Protocol


class Clock(Protocol):
    """Supplies the current calendar date."""

    def today(self) -> date:
        ...


class SystemClock:
    """Clock backed by the local system date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given date, for tests and replays."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> None:
        """Move the pinned date forward by a number of days."""
        self.day = self.day + timedelta(days=days)


class IdGenerator(Protocol):
    """Supplies unique, creation-ordered record ids."""

    def next_id(self) -> int:
        ...

    def observe(self, record_id: int) -> None:
        """Note an existing id so later ids are issued above it."""
        ...


class TimestampIdGenerator:
    """Millisecond-timestamp ids, bumped so they strictly increase.

    Two records created within the same millisecond still get distinct ids.
    """

    def __init__(self, now_ms: Optional[Callable[[], int]] = None):
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self) -> int:
        candidate = self._now_ms()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def observe(self, record_id: int) -> None:
        self._last = max(self._last, record_id)


class SequentialIdGenerator:
    """Counter ids starting at ``start``."""

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self) -> int:
        record_id = self._next
        self._next += 1
        return record_id

    def observe(self, record_id: int) -> None:
        self._next = max(self._next, record_id + 1)
