"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class PlanType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class MemberStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    OVERDUE = "overdue"
    PAID = "paid"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    DEBIT = "debit"
    TRANSFER = "transfer"


class RoutineGoal(str, Enum):
    STRENGTH = "strength"
    VOLUME = "volume"
    CARDIO = "cardio"
    MIXED = "mixed"


class DebtTier(str, Enum):
    ON_TIME = "on_time"
    MILD = "mild"
    SEVERE = "severe"


@dataclass
class Plan:
    """Billing tier with a fixed cost per installment"""

    id: int
    type: PlanType
    cost: int
    active: bool = True


@dataclass
class Routine:
    """Training routine (reference data)"""

    id: int
    name: str
    level: str
    duration_weeks: int
    goal: RoutineGoal


@dataclass
class Member:
    """Gym client bound to one plan and, optionally, one routine"""

    id: int
    first_name: str
    last_name: str
    age: Optional[int]
    email: Optional[str]
    status: MemberStatus
    enrolled_on: date
    plan_id: int
    routine_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Payment:
    """Single billing installment; status is always derived from the dates"""

    id: Optional[int]
    member_id: int
    expected_on: date
    amount: int  # Whole currency units
    status: PaymentStatus
    paid_on: Optional[date] = None
    method: Optional[PaymentMethod] = None


@dataclass
class Attendance:
    """One gym visit on a calendar day"""

    member_id: int
    routine_id: int
    day: date
    id: Optional[int] = None


@dataclass
class DebtClassification:
    """Output of debt classification for one member"""

    tier: DebtTier
    debt_total: int
    label: str
    color: str
