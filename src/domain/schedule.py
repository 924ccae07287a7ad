"""Schedule Builder

Expands a subscription's plan and anchor date into the twelve monthly
obligations of a calendar year and settles them against recorded payments.
"""

from datetime import datetime, time
from typing import List, Optional, Sequence
from src.domain.billing_dates import clamped_due_date
from src.domain.obligation import Obligation, ObligationStatus
from src.domain.payment import Payment, PaymentStatus
from src.domain.plan import Plan
from src.domain.subscription import Subscription


def find_payment_for_bucket(
    payments: Sequence[Payment], year: int, month: int
) -> Optional[Payment]:
    # At most one payment exists per bucket (uq_payments_subscription_period)
    for payment in payments:
        if payment.settlement_bucket() == (year, month):
            return payment
    return None


def build_schedule(
    subscription: Subscription,
    plan: Optional[Plan],
    payments: Sequence[Payment],
    now: datetime,
    year: Optional[int] = None,
) -> List[Obligation]:
    """
    Build the monthly obligations of a subscription for one calendar year

    Args:
        subscription: Subscription carrying the anchor date
        plan: Resolved plan, or None when the subscription has none
        payments: Payment history of the subscription
        now: Evaluation instant (decides LATE vs PENDING)
        year: Calendar year (defaults to the anchor date's year)

    Returns:
        Twelve obligations sorted by due date, or an empty list without a plan
    """
    if plan is None:
        return []

    anchor = subscription.current_period_end
    target_year = year if year is not None else anchor.year

    schedule: List[Obligation] = []
    for month in range(1, 13):
        due_date = clamped_due_date(target_year, month, anchor.day)
        payment = find_payment_for_bucket(payments, target_year, month)

        if payment is not None and payment.status == PaymentStatus.PAID:
            status = ObligationStatus.PAID
        elif datetime.combine(due_date, time.min) < now:
            status = ObligationStatus.LATE
        else:
            status = ObligationStatus.PENDING

        obligation = Obligation(
            due_date=due_date,
            amount_cents=plan.price_cents,
            status=status,
        )
        if payment is not None:
            obligation.matched_payment_id = payment.id
            obligation.paid_at = payment.paid_at
            obligation.provider = payment.provider
        schedule.append(obligation)

    schedule.sort(key=lambda o: o.due_date)
    return schedule
