"""Data access layer for gym billing entities"""

import logging
import unicodedata
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from gym_billing.infrastructure.database.models import (
    AttendanceRecord,
    MemberRecord,
    PaymentRecord,
    PlanRecord,
    RoutineRecord,
)
from gym_billing.domain.exceptions import MemberNotFoundError, PlanNotFoundError, StatusDriftError
from gym_billing.domain.models import (
    Attendance,
    Member,
    MemberStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Plan,
    PlanType,
    Routine,
    RoutineGoal,
)
from gym_billing.domain.status import derive_payment_status, normalize_settlement
from gym_billing.infrastructure.observability.metrics import payments_recorded_counter

logger = logging.getLogger(__name__)


def plan_to_domain(record: PlanRecord) -> Plan:
    return Plan(id=record.id, type=PlanType(record.type), cost=record.cost, active=record.active)


def routine_to_domain(record: RoutineRecord) -> Routine:
    return Routine(
        id=record.id,
        name=record.name,
        level=record.level,
        duration_weeks=record.duration_weeks,
        goal=RoutineGoal(record.goal),
    )


def member_to_domain(record: MemberRecord) -> Member:
    return Member(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        age=record.age,
        email=record.email,
        status=MemberStatus(record.status),
        enrolled_on=record.enrolled_on,
        plan_id=record.plan_id,
        routine_id=record.routine_id,
    )


def name_sort_key(name: str) -> str:
    """Accent- and case-insensitive key, so "Álvarez" sorts before "Benítez" """
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def verify_payment_status(record: PaymentRecord) -> PaymentStatus:
    """
    Re-derive the stored status from the stored dates as of `status_as_of`.

    Raises:
        StatusDriftError: If the persisted status no longer matches its inputs
    """
    derived = derive_payment_status(record.expected_on, record.paid_on, record.status_as_of)
    if derived.value != record.status:
        raise StatusDriftError(record.id, record.status, derived.value)
    return derived


def payment_to_domain(record: PaymentRecord) -> Payment:
    """Convert a stored payment, checking its status has not drifted"""
    status = verify_payment_status(record)
    return Payment(
        id=record.id,
        member_id=record.member_id,
        expected_on=record.expected_on,
        amount=record.amount,
        status=status,
        paid_on=record.paid_on,
        method=PaymentMethod(record.method) if record.method else None,
    )


class PlanRepository:
    """Repository for billing plans"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_type(self, plan_type: PlanType) -> Optional[PlanRecord]:
        return self.db.query(PlanRecord).filter(PlanRecord.type == plan_type.value).first()

    def get_by_id(self, plan_id: int) -> Optional[PlanRecord]:
        return self.db.query(PlanRecord).filter(PlanRecord.id == plan_id).first()

    def list_all(self) -> List[PlanRecord]:
        return self.db.query(PlanRecord).order_by(PlanRecord.id).all()

    def create(self, plan_type: PlanType, cost: int, active: bool = True) -> PlanRecord:
        db_plan = PlanRecord(type=plan_type.value, cost=cost, active=active)
        self.db.add(db_plan)
        self.db.flush()  # Get ID without committing
        return db_plan

    def get_or_create(self, plan_type: PlanType, cost: int) -> PlanRecord:
        """
        Insert the plan if absent, else fetch the existing one.

        The insert runs in a SAVEPOINT; losing a race on the unique `type`
        constraint rolls back only the savepoint and falls back to a fetch.
        The cost of an existing plan is never updated.
        """
        existing = self.find_by_type(plan_type)
        if existing is not None:
            return existing

        try:
            with self.db.begin_nested():
                return self.create(plan_type, cost)
        except IntegrityError:
            logger.info("Plan created concurrently, fetching existing", extra={"plan_type": plan_type.value})
            return self.db.query(PlanRecord).filter(PlanRecord.type == plan_type.value).one()


class RoutineRepository:
    """Repository for training routines"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, level: str, duration_weeks: int, goal: RoutineGoal) -> RoutineRecord:
        db_routine = RoutineRecord(name=name, level=level, duration_weeks=duration_weeks, goal=goal.value)
        self.db.add(db_routine)
        self.db.flush()
        return db_routine


class MemberRepository:
    """Repository for members"""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        first_name: str,
        last_name: str,
        plan_id: int,
        enrolled_on: date,
        status: MemberStatus = MemberStatus.ACTIVE,
        age: Optional[int] = None,
        email: Optional[str] = None,
        routine_id: Optional[int] = None,
    ) -> MemberRecord:
        db_member = MemberRecord(
            first_name=first_name,
            last_name=last_name,
            age=age,
            email=email,
            status=status.value,
            enrolled_on=enrolled_on,
            plan_id=plan_id,
            routine_id=routine_id,
        )
        self.db.add(db_member)
        self.db.flush()
        return db_member

    def get_by_id(self, member_id: int) -> Optional[MemberRecord]:
        return self.db.query(MemberRecord).filter(MemberRecord.id == member_id).first()

    def list_by_plan(self, plan_id: int) -> List[MemberRecord]:
        """Members of a plan with payments loaded, ordered by surname then first name"""
        members = (
            self.db.query(MemberRecord)
            .options(selectinload(MemberRecord.payments))
            .filter(MemberRecord.plan_id == plan_id)
            .all()
        )
        # SQLite compares raw bytes, so collate here
        return sorted(members, key=lambda m: (name_sort_key(m.last_name), name_sort_key(m.first_name), m.id))


class PaymentRepository:
    """Repository for billing installments"""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        member_id: int,
        expected_on: date,
        amount: int,
        now: date,
        paid_on: Optional[date] = None,
        method: Optional[PaymentMethod] = None,
    ) -> PaymentRecord:
        """Persist an installment with its status derived as of `now`"""
        settled_on = normalize_settlement(paid_on, now)
        status = derive_payment_status(expected_on, settled_on, now)

        db_payment = PaymentRecord(
            member_id=member_id,
            expected_on=expected_on,
            paid_on=settled_on,
            amount=amount,
            method=method.value if method else None,
            status=status.value,
            status_as_of=now,
        )
        self.db.add(db_payment)
        self.db.flush()

        payments_recorded_counter.labels(status=status.value).inc()
        return db_payment

    def list_for_member(self, member_id: int) -> List[PaymentRecord]:
        return (
            self.db.query(PaymentRecord)
            .filter(PaymentRecord.member_id == member_id)
            .order_by(PaymentRecord.expected_on.asc(), PaymentRecord.id.asc())
            .all()
        )


class AttendanceRepository:
    """Repository for attendance records"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, member_id: int, routine_id: int, day: date) -> AttendanceRecord:
        db_attendance = AttendanceRecord(member_id=member_id, routine_id=routine_id, day=day)
        self.db.add(db_attendance)
        self.db.flush()
        return db_attendance

    def list_for_member(self, member_id: int) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .filter(AttendanceRecord.member_id == member_id)
            .order_by(AttendanceRecord.day.desc(), AttendanceRecord.id.desc())
            .all()
        )


class GymStorage:
    """Storage collaborator used by the dataset assembler and the API, speaking domain models"""

    def __init__(self, db: Session):
        self.db = db
        self.plans = PlanRepository(db)
        self.routines = RoutineRepository(db)
        self.members = MemberRepository(db)
        self.payments = PaymentRepository(db)
        self.attendance = AttendanceRepository(db)

    # Plans

    def find_plan_by_type(self, plan_type: PlanType) -> Optional[Plan]:
        record = self.plans.find_by_type(plan_type)
        return plan_to_domain(record) if record else None

    def create_plan(self, plan_type: PlanType, cost: int) -> Plan:
        return plan_to_domain(self.plans.create(plan_type, cost))

    def get_or_create_plan(self, plan_type: PlanType, cost: int) -> Plan:
        return plan_to_domain(self.plans.get_or_create(plan_type, cost))

    def get_plan(self, plan_id: int) -> Optional[Plan]:
        record = self.plans.get_by_id(plan_id)
        return plan_to_domain(record) if record else None

    def list_plans(self) -> List[Plan]:
        return [plan_to_domain(p) for p in self.plans.list_all()]

    # Routines and members

    def create_routine(self, name: str, level: str, duration_weeks: int, goal: RoutineGoal) -> Routine:
        return routine_to_domain(self.routines.create(name, level, duration_weeks, goal))

    def create_member(self, **fields) -> Member:
        return member_to_domain(self.members.create(**fields))

    def get_member(self, member_id: int) -> Optional[Member]:
        record = self.members.get_by_id(member_id)
        return member_to_domain(record) if record else None

    def list_members_by_plan(self, plan_id: int) -> List[Tuple[Member, List[Payment]]]:
        return [
            (member_to_domain(m), [payment_to_domain(p) for p in m.payments])
            for m in self.members.list_by_plan(plan_id)
        ]

    # Payments and attendance

    def create_payment(
        self,
        member_id: int,
        expected_on: date,
        amount: int,
        now: date,
        paid_on: Optional[date] = None,
        method: Optional[PaymentMethod] = None,
    ) -> Payment:
        record = self.payments.create(member_id, expected_on, amount, now, paid_on=paid_on, method=method)
        return payment_to_domain(record)

    def list_payments_for_member(self, member_id: int) -> List[Payment]:
        return [payment_to_domain(p) for p in self.payments.list_for_member(member_id)]

    def create_attendance(self, attendance: Attendance) -> None:
        self.attendance.create(attendance.member_id, attendance.routine_id, attendance.day)

    def list_attendance_for_member(self, member_id: int) -> List[Attendance]:
        return [
            Attendance(member_id=a.member_id, routine_id=a.routine_id, day=a.day, id=a.id)
            for a in self.attendance.list_for_member(member_id)
        ]

    # Lookups that must succeed

    def require_plan(self, plan_id: int) -> Plan:
        plan = self.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(f"Plan {plan_id} not found")
        return plan

    def require_member(self, member_id: int) -> Member:
        member = self.get_member(member_id)
        if member is None:
            raise MemberNotFoundError(f"Member {member_id} not found")
        return member
