"""Consecutive-day attendance history for sample datasets"""

from datetime import date
from typing import Iterator, Optional

from gym_billing.domain.models import Attendance, Member, MemberStatus, Routine
from gym_billing.utils.date_utils import iter_days_back


def is_attendance_eligible(member: Member) -> bool:
    """Only active members with an assigned routine get attendance history"""
    return member.status == MemberStatus.ACTIVE and member.routine_id is not None


class AttendanceStreak:
    """
    Finite run of attendance records from `reference_now` back `days - 1` days.

    Iterating builds records lazily; every new iteration starts over and
    yields the same dates.
    """

    def __init__(self, member: Member, routine: Optional[Routine], days: int, reference_now: date):
        self.member = member
        self.routine = routine
        self.days = days if routine is not None and is_attendance_eligible(member) else 0
        self.reference_now = reference_now

    def __iter__(self) -> Iterator[Attendance]:
        for day in iter_days_back(self.reference_now, max(self.days, 0)):
            yield Attendance(member_id=self.member.id, routine_id=self.routine.id, day=day)

    def __len__(self) -> int:
        return max(self.days, 0)


def build_attendance_streak(
    member: Member,
    routine: Optional[Routine],
    days: int,
    reference_now: date,
) -> AttendanceStreak:
    """Attendance for `member` on `routine`, one per day ending on `reference_now`"""
    return AttendanceStreak(member, routine, days, reference_now)
