"""Reconciliation Aggregator

Portfolio overview of the current month and manual payment overrides.
Pure functions: all inputs are loaded by the caller beforehand.
"""

from datetime import datetime
from typing import Sequence, Tuple
from src.domain.base import BaseModel, generate_uuid
from src.domain.payment import Payment, PaymentProvider, PaymentStatus
from src.domain.plan import Plan
from src.domain.schedule import find_payment_for_bucket
from src.domain.subscription import Subscription


class Overview(BaseModel):
    """Financial summary of a calendar month (all amounts in cents)"""
    month: int
    year: int
    expected_cents: int = 0
    received_cents: int = 0
    pending_cents: int = 0
    active_subscriptions: int = 0


def is_paid_in(payments: Sequence[Payment], year: int, month: int) -> bool:
    return any(
        payment.status == PaymentStatus.PAID
        and payment.settlement_bucket() == (year, month)
        for payment in payments
    )


def compute_overview(subscriptions: Sequence[Subscription], now: datetime) -> Overview:
    """
    Aggregate expected and received amounts for now's month

    Each subscription with a plan is expected to pay its plan price once per
    month. Subscriptions without a plan are counted but add no amounts.
    """
    expected_cents = 0
    received_cents = 0

    for subscription in subscriptions:
        plan = subscription.plan
        if plan is None:
            continue

        expected_cents += plan.price_cents
        if is_paid_in(subscription.payments, now.year, now.month):
            received_cents += plan.price_cents

    return Overview(
        month=now.month,
        year=now.year,
        expected_cents=expected_cents,
        received_cents=received_cents,
        pending_cents=expected_cents - received_cents,
        active_subscriptions=len(subscriptions),
    )


def manual_annotation(reference_date: str, now: datetime) -> dict:
    return {
        "manual": True,
        "reference_date": reference_date,
        "marked_at": now.isoformat(),
    }


def apply_manual_payment(
    subscription: Subscription,
    plan: Plan,
    payments: Sequence[Payment],
    reference: datetime,
    reference_date: str,
    paid_at: datetime,
    now: datetime,
) -> Tuple[Payment, bool]:
    """
    Mark the reference month of a subscription as PAID

    Updates the payment already settling that month, or builds a new one.
    The bucket is pinned to the reference month so repeated calls converge
    on the same payment whatever paid_at is.

    Args:
        subscription: Subscription being settled
        plan: Plan of the subscription (amount of a new payment)
        payments: Payment history of the subscription
        reference: Parsed reference date
        reference_date: Reference date as received (kept in the annotation)
        paid_at: Settlement instant
        now: Instant the override is applied

    Returns:
        Tuple of (payment, created); the payment is not persisted
    """
    year, month = reference.year, reference.month
    annotation = manual_annotation(reference_date, now)

    existing = find_payment_for_bucket(payments, year, month)
    if existing is not None:
        existing.status = PaymentStatus.PAID
        existing.provider = PaymentProvider.MANUAL
        existing.paid_at = paid_at
        existing.pin_bucket(year, month)
        # New dict so the JSON column registers the change
        existing.raw_payload = {**(existing.raw_payload or {}), **annotation}
        return existing, False

    payment = Payment(
        subscription_id=subscription.id,
        amount_cents=plan.price_cents,
        status=PaymentStatus.PAID,
        provider=PaymentProvider.MANUAL,
        transaction_id=f"manual-{subscription.id}-{year}-{month}-{generate_uuid()}",
        paid_at=paid_at,
        period_year=year,
        period_month=month,
        raw_payload=annotation,
        created_at=now,
    )
    return payment, True
