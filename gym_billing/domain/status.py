"""Payment status derivation - the single source of truth for a payment's lifecycle state"""

from datetime import date
from typing import Optional

from gym_billing.domain.models import PaymentStatus


def normalize_settlement(paid_on: Optional[date], now: date) -> Optional[date]:
    """Drop a settlement date that lies in the future: it has not happened yet."""
    if paid_on is not None and paid_on <= now:
        return paid_on
    return None


def derive_payment_status(expected_on: date, paid_on: Optional[date], now: date) -> PaymentStatus:
    """
    Derive payment status from its dates as seen on `now`.

    Rules:
    - Unsettled: overdue once `now` is past the due date, pending otherwise
    - Settled on or before the due date: paid
    - Settled after the due date: overdue (late payment still counts as debt)

    A settlement dated after `now` is treated as unsettled.
    """
    settled_on = normalize_settlement(paid_on, now)

    if settled_on is None:
        return PaymentStatus.OVERDUE if now > expected_on else PaymentStatus.PENDING

    return PaymentStatus.OVERDUE if settled_on > expected_on else PaymentStatus.PAID
