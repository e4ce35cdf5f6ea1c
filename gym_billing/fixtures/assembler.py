"""Dataset assembler - builds a complete, internally consistent sample dataset"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from gym_billing.domain.models import Member, PaymentMethod, Plan, PlanType, Routine
from gym_billing.fixtures.attendance import build_attendance_streak, is_attendance_eligible
from gym_billing.fixtures.catalog import DEFAULT_CATALOG, MemberSeed, SampleCatalog, target_tier
from gym_billing.fixtures.jitter import SettlementDateJitter
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.utils.clock import Clock

logger = logging.getLogger(__name__)


@dataclass
class SeedSummary:
    """
    Counts of what a run produced.

    `plans` counts the plans the run resolved, whether inserted or already present.
    """

    run_date: date
    plans: int = 0
    routines: int = 0
    members: int = 0
    attendances: int = 0
    payments_by_status: Dict[str, int] = field(default_factory=dict)

    @property
    def payments(self) -> int:
        return sum(self.payments_by_status.values())


class DatasetAssembler:
    """
    Populate storage with plans, routines, members, payments and attendance.

    Flow:
    1. Find-or-create plans (idempotent), create routines
    2. Create scripted members and their payments
    3. Attendance streaks for eligible scripted members
    4. Create extra members, payments follow the plan schedule for their tier bucket
    5. Attendance streaks for eligible extra members (longer for some)

    Settled installments get a jittered "paid on" date; every status comes
    from the storage layer deriving it as of the clock's date.

    Assumes a single writer. Two concurrent runs can still both miss the
    plan lookup; the storage layer then falls back to the existing row.
    """

    def __init__(
        self,
        storage: GymStorage,
        clock: Clock,
        jitter: Optional[SettlementDateJitter] = None,
        catalog: SampleCatalog = DEFAULT_CATALOG,
        streak_days: int = 7,
    ):
        self.storage = storage
        self.clock = clock
        self.jitter = jitter or SettlementDateJitter()
        self.catalog = catalog
        self.streak_days = streak_days

    def run(self) -> SeedSummary:
        now = self.clock.today()
        summary = SeedSummary(run_date=now)
        statuses: Counter = Counter()

        plans: Dict[PlanType, Plan] = {
            p.type: self.storage.get_or_create_plan(p.type, p.cost) for p in self.catalog.plans
        }
        plans_by_id = {p.id: p for p in plans.values()}
        routines: Dict[str, Routine] = {
            r.key: self.storage.create_routine(r.name, r.level, r.duration_weeks, r.goal)
            for r in self.catalog.routines
        }
        routines_by_id = {r.id: r for r in routines.values()}
        summary.plans = len(plans)
        summary.routines = len(routines)
        logger.info("Reference data ready", extra={"plans": len(plans), "routines": len(routines)})

        # Scripted members
        members = [self._create_member(seed, plans, routines, now) for seed in self.catalog.members]
        for member, seed in zip(members, self.catalog.members):
            cost = plans_by_id[member.plan_id].cost
            for payment in seed.payments:
                statuses[self._record_payment(member, payment.expected_on, cost, payment.method, now)] += 1

        for member in members:
            summary.attendances += self._record_attendance(member, routines_by_id, self.streak_days, now)

        # Extra members on plan schedules
        extra = [self._create_member(seed, plans, routines, now) for seed in self.catalog.extra_members]
        for member in extra:
            plan = plans_by_id[member.plan_id]
            schedule = self.catalog.schedules[plan.type]
            methods = schedule.methods[target_tier(member.id)]
            for due_on, method in zip(schedule.due_dates, methods):
                statuses[self._record_payment(member, due_on, plan.cost, method, now)] += 1

        for member in extra:
            days = self.streak_days + member.id % 6
            summary.attendances += self._record_attendance(member, routines_by_id, days, now)

        summary.members = len(members) + len(extra)
        summary.payments_by_status = dict(statuses)
        return summary

    def _create_member(
        self,
        seed: MemberSeed,
        plans: Dict[PlanType, Plan],
        routines: Dict[str, Routine],
        now: date,
    ) -> Member:
        return self.storage.create_member(
            first_name=seed.first_name,
            last_name=seed.last_name,
            age=seed.age,
            email=seed.email,
            status=seed.status,
            enrolled_on=seed.enrolled_on or now,
            plan_id=plans[seed.plan].id,
            routine_id=routines[seed.routine].id if seed.routine else None,
        )

    def _record_payment(
        self,
        member: Member,
        expected_on: date,
        amount: int,
        method: Optional[PaymentMethod],
        now: date,
    ) -> str:
        paid_on = self.jitter.next(expected_on) if method is not None else None
        payment = self.storage.create_payment(
            member_id=member.id,
            expected_on=expected_on,
            amount=amount,
            now=now,
            paid_on=paid_on,
            method=method,
        )
        return payment.status.value

    def _record_attendance(self, member: Member, routines_by_id: Dict[int, Routine], days: int, now: date) -> int:
        if not is_attendance_eligible(member):
            return 0

        streak = build_attendance_streak(member, routines_by_id[member.routine_id], days, now)
        for attendance in streak:
            self.storage.create_attendance(attendance)
        return len(streak)
