"""GET /v1/plans and the per-plan debt dashboard"""

import time
from collections import Counter
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from gym_billing.api.dependencies import get_clock, get_request_id, get_storage
from gym_billing.api.v1.schemas import (
    MemberDebtRow,
    PlanDebtDashboard,
    PlanListResponse,
    PlanSchema,
    TierLegendItem,
)
from gym_billing.config import settings
from gym_billing.domain.debt import TIER_PRESENTATION, classify_debt, refresh_statuses
from gym_billing.domain.exceptions import PlanNotFoundError
from gym_billing.domain.models import DebtTier, Plan
from gym_billing.infrastructure.database.repositories import GymStorage
from gym_billing.infrastructure.observability.logging import log_dashboard_view
from gym_billing.infrastructure.observability.metrics import record_classification
from gym_billing.utils.clock import Clock

router = APIRouter()

PLAN_NOT_FOUND_MESSAGE = "Plan not found"
NO_MEMBERS_MESSAGE = "No members registered for this plan."


def _plan_schema(plan: Plan) -> PlanSchema:
    return PlanSchema(plan_id=plan.id, type=plan.type.value, cost=plan.cost, active=plan.active)


def tier_legend(threshold: int) -> List[TierLegendItem]:
    """Color legend shown above the dashboard table"""
    rules = {
        DebtTier.SEVERE: f"Debt above {threshold}",
        DebtTier.MILD: f"Debt up to {threshold}",
        DebtTier.ON_TIME: "No overdue debt",
    }
    return [
        TierLegendItem(tier=tier.value, label=label, color=color, rule=rules[tier])
        for tier, (label, color) in TIER_PRESENTATION.items()
    ]


@router.get("/plans", response_model=PlanListResponse)
def list_plans(storage: GymStorage = Depends(get_storage)):
    """List all billing plans"""
    return PlanListResponse(plans=[_plan_schema(p) for p in storage.list_plans()])


@router.get("/plans/{plan_id}", response_model=PlanSchema)
def get_plan(plan_id: int, storage: GymStorage = Depends(get_storage)):
    try:
        plan = storage.require_plan(plan_id)
    except PlanNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _plan_schema(plan)


@router.get("/plans/{plan_id}/members", response_model=PlanDebtDashboard)
def get_plan_debt_dashboard(
    plan_id: int,
    request: Request,
    descending: bool = Query(False, description="Sort by surname Z-A"),
    storage: GymStorage = Depends(get_storage),
    clock: Clock = Depends(get_clock),
):
    """
    Members of a plan with their debt tier, sorted by surname.

    Statuses are re-derived on the clock's date before classifying, so
    installments that fell due since they were stored count as overdue.
    An unknown plan or a plan without members is an empty state, not an error.
    """
    start_time = time.time()
    now = clock.today()
    threshold = settings.debt_installment_threshold
    legend = tier_legend(threshold)

    plan = storage.get_plan(plan_id)
    if plan is None:
        return PlanDebtDashboard(
            plan_id=plan_id,
            evaluated_on=now,
            message=PLAN_NOT_FOUND_MESSAGE,
            legend=legend,
            members=[],
        )

    rows = []
    for member, payments in storage.list_members_by_plan(plan_id):
        classification = classify_debt(refresh_statuses(payments, now), threshold)
        record_classification(classification.tier.value)
        rows.append(
            MemberDebtRow(
                member_id=member.id,
                full_name=member.full_name,
                last_name=member.last_name,
                tier=classification.tier.value,
                label=classification.label,
                color=classification.color,
                debt_total=classification.debt_total,
            )
        )

    if descending:
        rows.reverse()

    log_dashboard_view(
        get_request_id(request),
        plan_id,
        len(rows),
        dict(Counter(r.tier for r in rows)),
        (time.time() - start_time) * 1000,
    )

    return PlanDebtDashboard(
        plan_id=plan_id,
        plan_type=plan.type.value,
        evaluated_on=now,
        message=None if rows else NO_MEMBERS_MESSAGE,
        legend=legend,
        members=rows,
    )
