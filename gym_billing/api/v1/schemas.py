"""Pydantic schemas for API responses"""

from pydantic import BaseModel
from datetime import date
from typing import List, Optional


class PlanSchema(BaseModel):
    """Billing plan"""

    plan_id: int
    type: str
    cost: int
    active: bool


class PlanListResponse(BaseModel):
    """Response for GET /v1/plans"""

    plans: List[PlanSchema]


class TierLegendItem(BaseModel):
    """Explains one color of the debt dashboard"""

    tier: str
    label: str
    color: str
    rule: str


class MemberDebtRow(BaseModel):
    """One member line on the debt dashboard"""

    member_id: int
    full_name: str
    last_name: str
    tier: str
    label: str
    color: str
    debt_total: int


class PlanDebtDashboard(BaseModel):
    """Response for GET /v1/plans/{plan_id}/members"""

    plan_id: int
    plan_type: Optional[str] = None
    evaluated_on: date
    message: Optional[str] = None  # Empty-state text, None when rows exist
    legend: List[TierLegendItem]
    members: List[MemberDebtRow]


class PaymentSchema(BaseModel):
    """Single installment with status derived on `evaluated_on`"""

    payment_id: int
    expected_on: date
    paid_on: Optional[date] = None
    amount: int
    method: Optional[str] = None
    status: str


class MemberPaymentsResponse(BaseModel):
    """Response for GET /v1/members/{member_id}/payments"""

    member_id: int
    full_name: str
    evaluated_on: date
    tier: str
    label: str
    color: str
    debt_total: int
    payments: List[PaymentSchema]


class MemberAttendanceResponse(BaseModel):
    """Response for GET /v1/members/{member_id}/attendance"""

    member_id: int
    routine_id: Optional[int] = None
    days: List[date]
