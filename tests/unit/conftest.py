from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.payment import Payment, PaymentProvider, PaymentStatus
from src.domain.plan import Plan
from src.domain.subscription import Subscription, SubscriptionStatus


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_plan():
    def _make_plan(price_cents: int = 10000, plan_id: int = 1) -> Plan:
        return Plan(id=plan_id, name="Plano Mensal", price_cents=price_cents)
    return _make_plan


@pytest.fixture
def make_payment():
    def _make_payment(
        paid_at=None,
        created_at=None,
        status=PaymentStatus.PAID,
        payment_id: int = 1,
        subscription_id: int = 1,
        amount_cents: int = 10000,
        provider=PaymentProvider.STRIPE,
        raw_payload=None,
    ) -> Payment:
        return Payment(
            id=payment_id,
            subscription_id=subscription_id,
            amount_cents=amount_cents,
            status=status,
            provider=provider,
            transaction_id=f"tx-{payment_id}",
            paid_at=paid_at,
            raw_payload=raw_payload,
            created_at=created_at or paid_at or datetime(2026, 1, 1, 12, 0),
        )
    return _make_payment


@pytest.fixture
def make_subscription():
    def _make_subscription(
        anchor: date = date(2026, 1, 5),
        plan=None,
        payments=None,
        subscription_id: int = 1,
        user_id: int = 42,
        status=SubscriptionStatus.ACTIVE,
        created_at: datetime = datetime(2026, 1, 1, 12, 0),
    ) -> Subscription:
        subscription = Subscription(
            id=subscription_id,
            user_id=user_id,
            plan_id=plan.id if plan else None,
            status=status,
            current_period_end=anchor,
            created_at=created_at,
        )
        subscription.plan = plan
        subscription.payments = list(payments or [])
        return subscription
    return _make_subscription
