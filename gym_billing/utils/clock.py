"""Injectable time source so status derivation never reads the wall clock directly"""

from datetime import date, datetime, timezone
from typing import Optional


class Clock:
    """Supplies the evaluation date ("now") for status derivation"""

    def today(self) -> date:
        raise NotImplementedError


class SystemClock(Clock):
    """Current calendar date in UTC"""

    def today(self) -> date:
        return datetime.now(timezone.utc).date()


class FixedClock(Clock):
    """Always returns the same date (tests, pinned seeding)"""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day


def configured_clock(reference_date: Optional[date] = None) -> Clock:
    """Pinned clock when a reference date is configured, system clock otherwise"""
    if reference_date is not None:
        return FixedClock(reference_date)
    return SystemClock()
