"""Unit tests for debt classification"""

import pytest
from datetime import date
from gym_billing.domain.debt import (
    DEFAULT_INSTALLMENT_THRESHOLD,
    TIER_PRESENTATION,
    classify_debt,
    determine_debt_tier,
    refresh_statuses,
    total_overdue,
)
from gym_billing.config import Settings
from gym_billing.domain.models import DebtTier, PaymentStatus


def test_no_payments_is_on_time():
    """Test empty history"""
    result = classify_debt([])
    assert result.tier == DebtTier.ON_TIME
    assert result.debt_total == 0


def test_only_overdue_counts_towards_debt(make_payment):
    """Test pending and paid installments never add to debt"""
    payments = [
        make_payment(20000, PaymentStatus.PAID),
        make_payment(20000, PaymentStatus.PENDING),
        make_payment(20000, PaymentStatus.OVERDUE),
    ]
    assert total_overdue(payments) == 20000


def test_determine_debt_tier_boundaries():
    """Test tier thresholds around one monthly installment"""
    assert DEFAULT_INSTALLMENT_THRESHOLD == 20000
    assert determine_debt_tier(0) == DebtTier.ON_TIME
    assert determine_debt_tier(1) == DebtTier.MILD
    assert determine_debt_tier(20000) == DebtTier.MILD  # Equality is still mild
    assert determine_debt_tier(20001) == DebtTier.SEVERE


def test_tier_is_monotonic_in_debt():
    """Test a larger debt never maps to a less severe tier"""
    order = [DebtTier.ON_TIME, DebtTier.MILD, DebtTier.SEVERE]
    tiers = [determine_debt_tier(total) for total in range(0, 60001, 500)]
    ranks = [order.index(t) for t in tiers]
    assert ranks == sorted(ranks)


def test_custom_threshold():
    """Test the threshold is configurable but stays absolute"""
    assert determine_debt_tier(30000, threshold=52000) == DebtTier.MILD
    assert determine_debt_tier(52001, threshold=52000) == DebtTier.SEVERE


def test_monthly_single_missed_installment_is_mild(make_payment):
    result = classify_debt([make_payment(20000, PaymentStatus.OVERDUE)])
    assert result.tier == DebtTier.MILD
    assert result.debt_total == 20000


def test_monthly_two_missed_installments_is_severe(make_payment):
    result = classify_debt([make_payment(20000, PaymentStatus.OVERDUE)] * 2)
    assert result.tier == DebtTier.SEVERE
    assert result.debt_total == 40000


@pytest.mark.parametrize("installment", [52000, 220000])
def test_longer_plan_single_missed_installment_is_severe(make_payment, installment: int):
    """Test quarterly and annual installments exceed the absolute threshold on their own"""
    result = classify_debt([make_payment(installment, PaymentStatus.OVERDUE)])
    assert result.tier == DebtTier.SEVERE


def test_presentation_follows_tier(make_payment):
    """Test label and color come from the tier only"""
    for payments, tier in [
        ([], DebtTier.ON_TIME),
        ([make_payment(100, PaymentStatus.OVERDUE)], DebtTier.MILD),
        ([make_payment(50000, PaymentStatus.OVERDUE)], DebtTier.SEVERE),
    ]:
        result = classify_debt(payments)
        assert result.tier == tier
        assert (result.label, result.color) == TIER_PRESENTATION[tier]

    assert TIER_PRESENTATION[DebtTier.ON_TIME] == ("On time", "green")
    assert TIER_PRESENTATION[DebtTier.MILD] == ("Mild debt", "yellow")
    assert TIER_PRESENTATION[DebtTier.SEVERE] == ("Severe debt", "red")


def test_refresh_statuses_ages_pending_into_overdue(make_payment):
    """Test a payment stored as pending becomes overdue once its due date passes"""
    stored = [make_payment(20000, PaymentStatus.PENDING, expected_on=date(2025, 10, 1))]

    assert classify_debt(refresh_statuses(stored, date(2025, 9, 20))).tier == DebtTier.ON_TIME
    refreshed = refresh_statuses(stored, date(2025, 10, 2))
    assert refreshed[0].status == PaymentStatus.OVERDUE
    assert classify_debt(refreshed).tier == DebtTier.MILD

    # Original list untouched
    assert stored[0].status == PaymentStatus.PENDING


def test_settings_threshold_defaults_to_monthly_installment(monkeypatch):
    monkeypatch.delenv("DEBT_INSTALLMENT_THRESHOLD", raising=False)
    assert Settings().debt_installment_threshold == DEFAULT_INSTALLMENT_THRESHOLD == 20000
