"""Integration tests for manual payments and schedules with a real database"""

import pytest
from datetime import date, datetime
from sqlmodel import select

from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.plan_repository import SqlAlchemyPlanRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing.dtos import ManualPaymentCommandDTO, UpdateDueDateCommandDTO
from src.app.use_cases.billing.get_financial_overview import GetFinancialOverview
from src.app.use_cases.billing.get_payment_schedule import GetPaymentSchedule
from src.app.use_cases.billing.record_manual_payment import RecordManualPayment
from src.app.use_cases.billing.update_due_date import UpdateDueDate
from src.domain.payment import Payment, PaymentProvider, PaymentStatus
from src.domain.plan import Plan
from src.domain.subscription import Subscription

NOW = datetime(2026, 4, 10, 12, 0)


async def _seed_subscription(db_session, user_id=42, price_cents=10000):
    plan = Plan(name="Plano Mensal", price_cents=price_cents)
    db_session.add(plan)
    await db_session.commit()
    await db_session.refresh(plan)

    subscription = Subscription(
        user_id=user_id,
        plan_id=plan.id,
        current_period_end=date(2026, 1, 5),
    )
    db_session.add(subscription)
    await db_session.commit()
    await db_session.refresh(subscription)
    return subscription


def _record_manual_payment(db_session):
    return RecordManualPayment(
        SqlAlchemyUnitOfWork(db_session),
        SqlAlchemySubscriptionRepository(db_session),
        SqlAlchemyPaymentRepository(db_session),
    )


class TestManualPaymentFlowIntegration:

    @pytest.mark.asyncio
    async def test_manual_payment_is_idempotent_per_month(self, db_session):
        subscription = await _seed_subscription(db_session)
        use_case = _record_manual_payment(db_session)

        first = await use_case.execute(
            ManualPaymentCommandDTO(user_id=42, reference_date="05/03/2026"), now=NOW
        )
        second = await use_case.execute(
            ManualPaymentCommandDTO(user_id=42, reference_date="2026-03-28", paid_at="02/04/2026"),
            now=NOW,
        )

        assert first.is_ok() and second.is_ok()
        assert first.value.created is True
        assert second.value.created is False
        assert second.value.payment.id == first.value.payment.id

        result = await db_session.execute(
            select(Payment).where(Payment.subscription_id == subscription.id)
        )
        payments = list(result.scalars().all())
        assert len(payments) == 1
        assert payments[0].status == PaymentStatus.PAID
        assert payments[0].provider == PaymentProvider.MANUAL
        assert (payments[0].period_year, payments[0].period_month) == (2026, 3)
        assert payments[0].raw_payload["reference_date"] == "2026-03-28"

    @pytest.mark.asyncio
    async def test_manual_payment_settles_late_gateway_payment(self, db_session):
        subscription = await _seed_subscription(db_session)
        db_session.add(
            Payment(
                subscription_id=subscription.id,
                amount_cents=10000,
                status=PaymentStatus.FAILED,
                provider=PaymentProvider.STRIPE,
                transaction_id="cs_failed_feb",
                period_year=2026,
                period_month=2,
                raw_payload={"checkout_session": "cs_failed_feb"},
                created_at=datetime(2026, 2, 5, 9, 0),
            )
        )
        await db_session.commit()
        schedule_use_case = GetPaymentSchedule(SqlAlchemySubscriptionRepository(db_session))

        before = await schedule_use_case.execute(42, now=NOW)
        pay = await _record_manual_payment(db_session).execute(
            ManualPaymentCommandDTO(user_id=42, reference_date="10/02/2026"), now=NOW
        )
        after = await schedule_use_case.execute(42, now=NOW)

        assert before.value.payments[1].status == "LATE"
        assert pay.value.created is False
        assert pay.value.payment.raw_payload["checkout_session"] == "cs_failed_feb"
        assert pay.value.payment.raw_payload["manual"] is True
        assert after.value.payments[1].status == "PAID"
        assert after.value.payments[1].provider == "MANUAL"

    @pytest.mark.asyncio
    async def test_overview_after_manual_payment(self, db_session):
        await _seed_subscription(db_session, user_id=1, price_cents=100)
        await _seed_subscription(db_session, user_id=2, price_cents=100)
        await _record_manual_payment(db_session).execute(
            ManualPaymentCommandDTO(user_id=1, reference_date="01/04/2026"), now=NOW
        )

        result = await GetFinancialOverview(SqlAlchemySubscriptionRepository(db_session)).execute(now=NOW)

        assert result.is_ok()
        assert result.value.expected_cents == 200
        assert result.value.received_cents == 100
        assert result.value.pending_cents == 100
        assert result.value.active_subscriptions == 2

    @pytest.mark.asyncio
    async def test_update_due_date_opens_subscription_on_default_plan(self, db_session):
        use_case = UpdateDueDate(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemySubscriptionRepository(db_session),
            SqlAlchemyPlanRepository(db_session),
        )

        opened = await use_case.execute(UpdateDueDateCommandDTO(user_id=7, due_date="31/01/2026"), now=NOW)
        moved = await use_case.execute(UpdateDueDateCommandDTO(user_id=7, due_date="2026-01-15"), now=NOW)

        assert opened.value.created is True
        assert moved.value.created is False
        assert moved.value.subscription_id == opened.value.subscription_id
        assert moved.value.current_period_end == date(2026, 1, 15)

        schedule = await GetPaymentSchedule(SqlAlchemySubscriptionRepository(db_session)).execute(7, now=NOW)
        assert len(schedule.value.payments) == 12
        assert all(o.amount_cents == 100 for o in schedule.value.payments)
