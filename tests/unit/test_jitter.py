"""Unit tests for settlement-date jitter"""

from datetime import date, timedelta
from gym_billing.fixtures.jitter import SettlementDateJitter


def test_first_four_calls():
    """Test odd calls keep the date, even calls move it 3 then 2 days early"""
    jitter = SettlementDateJitter()
    e1, e2, e3, e4 = date(2024, 7, 1), date(2024, 8, 1), date(2024, 9, 1), date(2024, 10, 1)

    assert jitter.next(e1) == e1
    assert jitter.next(e2) == e2 - timedelta(days=3)  # counter 2 -> (2 % 3) + 1
    assert jitter.next(e3) == e3
    assert jitter.next(e4) == e4 - timedelta(days=2)  # counter 4 -> (4 % 3) + 1
    assert jitter.counter == 4


def test_early_offsets_cycle():
    """Test even calls cycle through 3, 2, 1 days early"""
    jitter = SettlementDateJitter()
    expected = date(2025, 3, 10)
    offsets = [(expected - jitter.next(expected)).days for _ in range(12)]

    assert offsets == [0, 3, 0, 2, 0, 1, 0, 3, 0, 2, 0, 1]


def test_never_later_than_expected():
    """Test jittered dates always settle on or before the due date"""
    jitter = SettlementDateJitter()
    expected = date(2024, 3, 1)  # Crosses a month (and leap day) boundary
    for _ in range(30):
        assert jitter.next(expected) <= expected


def test_deterministic_for_same_start():
    """Test two generators with the same start produce identical sequences"""
    dates = [date(2024, 1, 10) + timedelta(days=31 * i) for i in range(10)]
    first = SettlementDateJitter(start=5)
    second = SettlementDateJitter(start=5)

    assert [first.next(d) for d in dates] == [second.next(d) for d in dates]


def test_instances_do_not_share_state():
    """Test counters are per instance"""
    a = SettlementDateJitter()
    b = SettlementDateJitter()
    a.next(date(2024, 1, 1))
    a.next(date(2024, 1, 1))

    assert a.counter == 2
    assert b.counter == 0
    assert b.next(date(2024, 1, 1)) == date(2024, 1, 1)


def test_start_counter_resumes_sequence():
    """Test starting at 1 continues where a fresh generator's first call left off"""
    expected = date(2024, 8, 1)
    resumed = SettlementDateJitter(start=1)
    assert resumed.next(expected) == expected - timedelta(days=3)
