"""GET /v1/members/{member_id}/... - payment history and attendance"""

from fastapi import APIRouter, Depends, HTTPException

from gym_billing.api.dependencies import get_clock, get_storage
from gym_billing.api.v1.schemas import MemberAttendanceResponse, MemberPaymentsResponse, PaymentSchema
from gym_billing.config import settings
from gym_billing.domain.debt import classify_debt, refresh_statuses
from gym_billing.domain.exceptions import MemberNotFoundError
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.utils.clock import Clock

router = APIRouter()


@router.get("/members/{member_id}/payments", response_model=MemberPaymentsResponse)
def get_member_payments(
    member_id: int,
    storage: GymStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """
    Retrieve a member's installments with statuses as of today.

    Returns:
        Payments ordered by due date plus the member's debt classification
    """
    try:
        member = storage.require_member(member_id)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    now = clock.today()
    payments = refresh_statuses(storage.list_payments_for_member(member_id), now)
    classification = classify_debt(payments, settings.debt_installment_threshold)

    return MemberPaymentsResponse(
        member_id=member.id,
        full_name=member.full_name,
        evaluated_on=now,
        tier=classification.tier.value,
        label=classification.label,
        color=classification.color,
        debt_total=classification.debt_total,
        payments=[
            PaymentSchema(
                payment_id=p.id,
                expected_on=p.expected_on,
                paid_on=p.paid_on,
                amount=p.amount,
                method=p.method.value if p.method else None,
                status=p.status.value,
            )
            for p in payments
        ],
    )


@router.get("/members/{member_id}/attendance", response_model=MemberAttendanceResponse)
def get_member_attendance(member_id: int, storage: GymStorage = Depends(get_storage)):
    """Recorded attendance days, newest first"""
    try:
        member = storage.require_member(member_id)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MemberAttendanceResponse(
        member_id=member.id,
        routine_id=member.routine_id,
        days=[a.day for a in storage.list_attendance_for_member(member_id)],
    )
