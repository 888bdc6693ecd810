"""Time sources and calendar-day windows.

Everything that needs "now" receives a :class:`Clock` so tests can freeze or
advance time instead of depending on real wall-clock boundaries.
"""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta, tzinfo
from typing import Protocol


class Clock(Protocol):
    """Anything that can report the current timezone-aware UTC time."""

    def now(self) -> datetime: ...


class WallClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, moment: datetime) -> None:
        self._moment = _as_utc(moment)

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        """Jump to an absolute point in time."""
        self._moment = _as_utc(moment)

    def advance(self, **delta: float) -> datetime:
        """Move forward by a ``timedelta`` built from keyword arguments."""
        self._moment = self._moment + timedelta(**delta)
        return self._moment


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        raise ValueError("clock times must be timezone-aware")
    return moment.astimezone(UTC)


def day_window(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the UTC bounds ``[start, end)`` of the local calendar day containing ``now``.

    Args:
        now: A timezone-aware instant.
        tz: Timezone that defines where the day starts and ends.

    Returns:
        Local midnight of that day and of the following day, both in UTC. The
        window can be 23 or 25 hours long across DST changes.
    """
    local_day = now.astimezone(tz).date()
    start = datetime.combine(local_day, time.min, tzinfo=tz)
    end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


_default_clock: Clock = WallClock()


def get_clock() -> Clock:
    """Return the process-wide clock (a FastAPI dependency, overridable in tests)."""
    return _default_clock
