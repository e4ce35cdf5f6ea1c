"""Deterministic settlement-date jitter for sample datasets"""

from datetime import date

from gym_billing.utils.date_utils import days_before


class SettlementDateJitter:
    """
    Produce a plausible "paid on" date near an expected due date.

    Each call advances a private counter:
    - odd counter:  settle on the due date
    - even counter: settle (counter % 3) + 1 days early, cycling 3, 2, 1 ...

    No random source or wall clock is involved, so the same starting counter
    and call sequence always yield the same dates. Not thread-safe: one
    instance per generation run.
    """

    def __init__(self, start: int = 0):
        self._counter = start

    @property
    def counter(self) -> int:
        return self._counter

    def next(self, expected_on: date) -> date:
        self._counter += 1

        if self._counter % 2 == 1:
            return expected_on

        return days_before(expected_on, (self._counter % 3) + 1)
