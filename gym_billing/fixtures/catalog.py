"""Sample reference data and payment scripts for the demo dataset"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from gym_billing.domain.models import DebtTier, MemberStatus, PaymentMethod, PlanType, RoutineGoal

CASH = PaymentMethod.CASH
CARD = PaymentMethod.CARD
DEBIT = PaymentMethod.DEBIT
TRANSFER = PaymentMethod.TRANSFER


@dataclass(frozen=True)
class PlanSeed:
    type: PlanType
    cost: int


@dataclass(frozen=True)
class RoutineSeed:
    key: str
    name: str
    level: str
    duration_weeks: int
    goal: RoutineGoal


@dataclass(frozen=True)
class PaymentSeed:
    """Scripted installment. A method means it was settled; None leaves it open."""

    expected_on: date
    method: Optional[PaymentMethod] = None


@dataclass(frozen=True)
class MemberSeed:
    first_name: str
    last_name: str
    age: int
    email: str
    plan: PlanType
    routine: Optional[str]
    status: MemberStatus = MemberStatus.ACTIVE
    enrolled_on: Optional[date] = None  # None = enrolled on the run date
    payments: Tuple[PaymentSeed, ...] = ()


@dataclass(frozen=True)
class PaymentSchedule:
    """Due dates for a plan, plus which of them get settled for each target tier"""

    due_dates: Tuple[date, ...]
    methods: Dict[DebtTier, Tuple[Optional[PaymentMethod], ...]]


@dataclass(frozen=True)
class SampleCatalog:
    plans: List[PlanSeed]
    routines: List[RoutineSeed]
    members: List[MemberSeed]
    extra_members: List[MemberSeed]
    schedules: Dict[PlanType, PaymentSchedule] = field(default_factory=dict)


def target_tier(member_id: int) -> DebtTier:
    """Deterministic tier bucket for scheduled members: 5 of 8 on time, 2 mild, 1 severe"""
    bucket = member_id % 8
    if bucket <= 4:
        return DebtTier.ON_TIME
    elif bucket <= 6:
        return DebtTier.MILD
    else:
        return DebtTier.SEVERE


PLANS = [
    PlanSeed(PlanType.MONTHLY, 20_000),
    PlanSeed(PlanType.QUARTERLY, 52_000),
    PlanSeed(PlanType.ANNUAL, 220_000),
]

ROUTINES = [
    RoutineSeed("strength", "Total Strength", "Intermediate", 8, RoutineGoal.STRENGTH),
    RoutineSeed("volume", "Maximum Volume", "Advanced", 12, RoutineGoal.VOLUME),
    RoutineSeed("cardio", "Intense Cardio", "Beginner", 6, RoutineGoal.CARDIO),
    RoutineSeed("mixed", "Mixed Functional", "Intermediate", 10, RoutineGoal.MIXED),
    RoutineSeed("hypertrophy", "Hypertrophy Pro", "Advanced", 16, RoutineGoal.VOLUME),
]

MONTHLY, QUARTERLY, ANNUAL = PlanType.MONTHLY, PlanType.QUARTERLY, PlanType.ANNUAL
INACTIVE = MemberStatus.INACTIVE

# Hand-scripted histories covering pending, overdue and paid installments
MEMBERS = [
    MemberSeed("Juan", "Pérez", 28, "juan@example.com", MONTHLY, "strength", INACTIVE, date(2024, 5, 11), (
        PaymentSeed(date(2024, 7, 1)),
        PaymentSeed(date(2024, 8, 1)),
        PaymentSeed(date(2024, 9, 1)),
    )),
    MemberSeed("Teo", "Fassardi", 21, "teo@example.com", MONTHLY, "cardio", enrolled_on=date(2023, 8, 11), payments=(
        PaymentSeed(date(2024, 7, 27)),
        PaymentSeed(date(2024, 8, 27)),
    )),
    MemberSeed("María", "Gómez", 32, "maria@example.com", ANNUAL, "volume", payments=(
        PaymentSeed(date(2024, 1, 10), TRANSFER),
        PaymentSeed(date(2025, 1, 10)),
    )),
    MemberSeed("Lucas", "Rodríguez", 25, "lucas@example.com", MONTHLY, "cardio", payments=(
        PaymentSeed(date(2024, 7, 1)),
        PaymentSeed(date(2024, 8, 1)),
    )),
    MemberSeed("Laura", "Fernández", 30, "laura@example.com", QUARTERLY, "volume", payments=(
        PaymentSeed(date(2024, 6, 10), CASH),
        PaymentSeed(date(2024, 9, 10)),
    )),
    MemberSeed("Martín", "Sosa", 27, "martin@example.com", MONTHLY, "strength", payments=(
        PaymentSeed(date(2024, 7, 1), CARD),
        PaymentSeed(date(2024, 8, 1), DEBIT),
        PaymentSeed(date(2024, 9, 1), CASH),
    )),
    MemberSeed("Sofía", "López", 29, "sofia@example.com", QUARTERLY, "cardio", payments=(
        PaymentSeed(date(2024, 5, 5), TRANSFER),
    )),
    MemberSeed("Diego", "Ramírez", 31, "diego@example.com", ANNUAL, "strength", payments=(
        PaymentSeed(date(2024, 2, 15), CARD),
    )),
    MemberSeed("Valentina", "Mendoza", 26, "valentina@example.com", MONTHLY, "volume", payments=(
        PaymentSeed(date(2024, 7, 1), CASH),
        PaymentSeed(date(2024, 8, 1)),
    )),
    MemberSeed("Carlos", "Moreno", 40, "carlos@example.com", MONTHLY, "strength", payments=(
        PaymentSeed(date(2024, 6, 1)),
        PaymentSeed(date(2024, 7, 1)),
        PaymentSeed(date(2024, 8, 1)),
    )),
    MemberSeed("Ana", "Suárez", 24, "ana@example.com", MONTHLY, "mixed", payments=(
        PaymentSeed(date(2024, 7, 15)),
    )),
    MemberSeed("Bruno", "Castro", 35, "bruno@example.com", QUARTERLY, "hypertrophy", payments=(
        PaymentSeed(date(2025, 6, 11), CASH),
    )),
    MemberSeed("Pedro", "Linares", 33, "pedro@example.com", MONTHLY, "mixed", payments=(
        PaymentSeed(date(2024, 8, 1), TRANSFER),
        PaymentSeed(date(2024, 9, 1), CARD),
    )),
]

# Payments for these follow SCHEDULES, picked by target_tier(member.id)
EXTRA_MEMBERS = [
    MemberSeed("Nicolás", "Vega", 22, "nicolas.vega@example.com", MONTHLY, "cardio", enrolled_on=date(2024, 2, 10)),
    MemberSeed("Camila", "Ortiz", 29, "camila.ortiz@example.com", MONTHLY, "mixed", enrolled_on=date(2024, 3, 15)),
    MemberSeed("Tomás", "Aguilar", 23, "tomas.aguilar@example.com", MONTHLY, "strength", enrolled_on=date(2024, 5, 1)),
    MemberSeed("Micaela", "Juárez", 28, "micaela.juarez@example.com", MONTHLY, "cardio", INACTIVE, date(2024, 3, 4)),
    MemberSeed("Rocío", "Varela", 31, "rocio.varela@example.com", MONTHLY, "mixed", enrolled_on=date(2024, 6, 18)),
    MemberSeed("Ezequiel", "Silva", 27, "ezequiel.silva@example.com", MONTHLY, "strength", enrolled_on=date(2023, 12, 28)),
    MemberSeed("Franco", "Ruiz", 25, "franco.ruiz@example.com", QUARTERLY, "cardio", enrolled_on=date(2024, 4, 9)),
    MemberSeed("Carolina", "Benítez", 34, "carolina.benitez@example.com", QUARTERLY, "volume", enrolled_on=date(2024, 7, 6)),
    MemberSeed("Julián", "Maidana", 27, "julian.maidana@example.com", QUARTERLY, "strength", enrolled_on=date(2024, 1, 8)),
    MemberSeed("Paula", "Acosta", 33, "paula.acosta@example.com", QUARTERLY, "hypertrophy", enrolled_on=date(2023, 11, 12)),
    MemberSeed("Lucía", "Torres", 24, "lucia.torres@example.com", ANNUAL, "volume", enrolled_on=date(2024, 6, 2)),
    MemberSeed("Agustina", "Bravo", 26, "agustina.bravo@example.com", ANNUAL, "mixed", enrolled_on=date(2023, 9, 3)),
    MemberSeed("Leandro", "Prieto", 28, "leandro.prieto@example.com", ANNUAL, "cardio", INACTIVE, date(2023, 8, 23)),
]

SCHEDULES = {
    MONTHLY: PaymentSchedule(
        due_dates=(date(2025, 7, 1), date(2025, 8, 1), date(2025, 9, 1), date(2025, 10, 1)),
        methods={
            DebtTier.ON_TIME: (CARD, CASH, TRANSFER, None),
            DebtTier.MILD: (DEBIT, CASH, None, None),
            DebtTier.SEVERE: (CARD, None, None, None),
        },
    ),
    QUARTERLY: PaymentSchedule(
        due_dates=(date(2025, 3, 10), date(2025, 6, 10), date(2025, 9, 10), date(2025, 12, 10)),
        methods={
            DebtTier.ON_TIME: (TRANSFER, CARD, CASH, None),
            DebtTier.MILD: (CASH, DEBIT, None, None),
            DebtTier.SEVERE: (CARD, None, None, None),
        },
    ),
    ANNUAL: PaymentSchedule(
        due_dates=(date(2024, 2, 15), date(2025, 2, 15), date(2026, 2, 15)),
        methods={
            DebtTier.ON_TIME: (CARD, TRANSFER, None),
            DebtTier.MILD: (CASH, None, None),
            DebtTier.SEVERE: (DEBIT, None, None),
        },
    ),
}

DEFAULT_CATALOG = SampleCatalog(
    plans=PLANS,
    routines=ROUTINES,
    members=MEMBERS,
    extra_members=EXTRA_MEMBERS,
    schedules=SCHEDULES,
)
