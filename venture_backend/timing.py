"""
Time tracking: clocks, elapsed-minute calculation and the timer state machine.

A time entry is created ``Running`` with no end time and moves to
``Completed`` exactly once, when it is stopped.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Union

from venture_backend.errors import InvalidInterval, InvalidParameter, InvalidState

RUNNING = "Running"
COMPLETED = "Completed"

Timestamp = Union[datetime, str]


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current time, timezone-aware."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock under test control; ``advance`` moves it forward."""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, delta):
        self._now = self._now + delta
        return self._now


def parse_timestamp(value: Timestamp) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"not an ISO-8601 timestamp: {value!r}") from None


def duration(start: Timestamp, end: Timestamp) -> int:
    """Whole minutes between ``start`` and ``end``, halves rounded up."""
    elapsed_ms = (parse_timestamp(end) - parse_timestamp(start)).total_seconds() * 1000
    if elapsed_ms < 0:
        raise InvalidInterval("end time is before start time")
    return int(math.floor(elapsed_ms / 60000 + 0.5))


def stop_patch(entry, now: datetime):
    """Fields that complete a running ``entry`` at ``now``."""
    if entry.get("status") != RUNNING:
        raise InvalidState("time entry is not running")
    return {
        "endTime": now.isoformat(),
        "durationMinutes": duration(entry["startTime"], now),
        "status": COMPLETED,
    }


def tracked_minutes(entries):
    """Total minutes over ``entries``; running timers have no duration yet."""
    return sum(
        int(entry.get("durationMinutes") or 0)
        for entry in entries
        if entry.get("status") != RUNNING
    )


def minutes_to_hours(minutes):
    return round(minutes / 60, 2)
