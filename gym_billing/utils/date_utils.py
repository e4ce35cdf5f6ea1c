"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import Iterator


def iter_days_back(end: date, days: int) -> Iterator[date]:
    """Yield `days` consecutive dates walking backwards from `end` (inclusive)"""
    for i in range(days):
        yield end - timedelta(days=i)


def days_before(day: date, days: int) -> date:
    return day - timedelta(days=days)
