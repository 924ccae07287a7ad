"""RecordManualPayment Use Case

Marks a month of a client's subscription as paid, bypassing the gateway.
Create-or-update per settlement bucket, so repeated calls never duplicate.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.billing_dates import parse_flexible_date
from src.domain.payment import Payment
from src.domain.reconciliation import apply_manual_payment
from .dtos import ManualPaymentCommandDTO, ManualPaymentResponseDTO, PaymentDTO

logger = logging.getLogger(__name__)


class RecordManualPayment:
    """
    Use Case: Record a manual payment override

    Business Rules:
    1. reference_date and paid_at accept DD/MM/YYYY or ISO dates
    2. paid_at defaults to now
    3. The payment already settling the reference month is updated
       (PAID, MANUAL, annotation merged into raw_payload)
    4. Otherwise a new PAID payment for the plan price is created
    5. One payment per (subscription, year, month): a concurrent duplicate
       is rejected by the storage unique constraint and rolled back

    Flow:
    1. Parse dates
    2. Load the current subscription with plan and payments
    3. Apply the override on the payment history
    4. Persist (create or update) and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.payment_repo = payment_repo

    async def execute(
        self, command: ManualPaymentCommandDTO, now: Optional[datetime] = None
    ) -> Result[ManualPaymentResponseDTO]:
        """
        Execute manual payment recording

        Args:
            command: ManualPaymentCommandDTO with user_id, reference_date, paid_at
            now: Instant the override is applied (defaults to the current local time)

        Returns:
            Result[ManualPaymentResponseDTO]: Payment and whether it was created

        Errors:
            INVALID_DATE: reference_date or paid_at cannot be parsed
            SUBSCRIPTION_NOT_FOUND: User has no subscription or the subscription has no plan
            MANUAL_PAYMENT_FAILED: Persistence failure
        """
        now = now or datetime.now()

        # Step 1: Parse dates before touching storage
        reference = parse_flexible_date(command.reference_date)
        if reference is None:
            return Return.err(
                Error(
                    code="INVALID_DATE",
                    message=f"Invalid reference date: {command.reference_date}",
                    reason="Expected DD/MM/YYYY or YYYY-MM-DD",
                )
            )

        paid_at = now
        if command.paid_at:
            paid_at = parse_flexible_date(command.paid_at)
            if paid_at is None:
                return Return.err(
                    Error(
                        code="INVALID_DATE",
                        message=f"Invalid paid_at date: {command.paid_at}",
                        reason="Expected DD/MM/YYYY or YYYY-MM-DD",
                    )
                )

        try:
            # Step 2: Load subscription, plan and payment history
            subscription = await self.subscription_repo.get_current_by_user_id(command.user_id)

            if not subscription or not subscription.plan:
                return Return.err(
                    Error(
                        code="SUBSCRIPTION_NOT_FOUND",
                        message=f"No subscription found for user {command.user_id}",
                    )
                )

            # Step 3: Apply override
            payment, created = apply_manual_payment(
                subscription,
                subscription.plan,
                subscription.payments,
                reference,
                command.reference_date,
                paid_at,
                now,
            )

            # Step 4: Persist and commit
            if created:
                payment = await self.payment_repo.create(payment)
            else:
                payment = await self.payment_repo.update(payment)

            await self.uow.commit()

            logger.info(
                f"Manual payment {'created' if created else 'updated'} "
                f"(payment_id={payment.id}, subscription_id={subscription.id}, "
                f"bucket={reference.year}-{reference.month:02d})"
            )

            return Return.ok(
                ManualPaymentResponseDTO(payment=self._to_payment_dto(payment), created=created)
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Manual payment failed for user {command.user_id}: {e}")
            return Return.err(
                Error(
                    code="MANUAL_PAYMENT_FAILED",
                    message="Failed to record manual payment",
                    reason=str(e),
                )
            )

    def _to_payment_dto(self, payment: Payment) -> PaymentDTO:
        return PaymentDTO(
            id=payment.id,
            subscription_id=payment.subscription_id,
            amount_cents=payment.amount_cents,
            status=payment.status.value,
            provider=payment.provider.value,
            transaction_id=payment.transaction_id,
            paid_at=payment.paid_at,
            period_year=payment.period_year,
            period_month=payment.period_month,
            raw_payload=payment.raw_payload,
            created_at=payment.created_at,
        )
