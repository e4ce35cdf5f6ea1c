"""Debt classification engine - maps a member's overdue installments to a severity tier"""

from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Tuple

from gym_billing.domain.models import DebtClassification, DebtTier, Payment, PaymentStatus
from gym_billing.domain.status import derive_payment_status

# One monthly installment. Absolute amount, not scaled by plan cost.
DEFAULT_INSTALLMENT_THRESHOLD = 20_000

# (label, color token) per tier
TIER_PRESENTATION: Dict[DebtTier, Tuple[str, str]] = {
    DebtTier.ON_TIME: ("On time", "green"),
    DebtTier.MILD: ("Mild debt", "yellow"),
    DebtTier.SEVERE: ("Severe debt", "red"),
}


def total_overdue(payments: Iterable[Payment]) -> int:
    """Sum of amounts for overdue payments only (pending and paid never count)"""
    return sum(p.amount for p in payments if p.status == PaymentStatus.OVERDUE)


def determine_debt_tier(debt_total: int, threshold: int = DEFAULT_INSTALLMENT_THRESHOLD) -> DebtTier:
    """
    Map summed overdue amount to a tier.

    Tiers:
    - 0:                       on_time
    - 0 < total <= threshold:  mild (equality is still mild)
    - total > threshold:       severe

    Quarterly and annual installments exceed the threshold on their own, so a
    single missed one already lands in severe.
    """
    if debt_total <= 0:
        return DebtTier.ON_TIME
    elif debt_total <= threshold:
        return DebtTier.MILD
    else:
        return DebtTier.SEVERE


def classify_debt(
    payments: Iterable[Payment],
    threshold: int = DEFAULT_INSTALLMENT_THRESHOLD,
) -> DebtClassification:
    """Main entry point: aggregate overdue payments and attach tier presentation"""
    debt_total = total_overdue(payments)
    tier = determine_debt_tier(debt_total, threshold)
    label, color = TIER_PRESENTATION[tier]

    return DebtClassification(tier=tier, debt_total=debt_total, label=label, color=color)


def refresh_statuses(payments: Iterable[Payment], now: date) -> List[Payment]:
    """Re-derive each payment's status as seen on `now` (persisted statuses age)"""
    return [
        replace(p, status=derive_payment_status(p.expected_on, p.paid_on, now))
        for p in payments
    ]
