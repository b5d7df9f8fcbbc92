"""
Clock abstraction: the single source of "today" for the progress engine.
"""
from datetime import date, datetime, timezone
from typing import Optional


class SystemClock:
    """Wall clock in the local timezone."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()

    def utc_timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class FixedClock:
    """Clock frozen at a given instant; used by tests and the CLI --today flag."""

    def __init__(self, today: date, now: Optional[datetime] = None):
        self._today = today
        self._now = now or datetime(today.year, today.month, today.day, 12, 0, 0)

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._today

    def utc_timestamp(self) -> str:
        return self._now.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


def get_clock() -> SystemClock:
    return SystemClock()
