"""Get Payment Schedule Use Case

Builds the monthly payments view of a client for one calendar year.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.obligation import Obligation
from src.domain.schedule import build_schedule
from .dtos import ObligationDTO, PaymentScheduleResponseDTO

logger = logging.getLogger(__name__)


class GetPaymentSchedule:
    """
    Use Case: List the monthly obligations of a client

    Business Rules:
    1. Only the current subscription of the user is reconciled
    2. No subscription or no plan yields an empty schedule, not an error
    3. Status is recomputed on every call (a late month turns PAID as soon
       as its payment is recorded)
    """

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(
        self,
        user_id: int,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Result[PaymentScheduleResponseDTO]:
        """
        Execute schedule retrieval

        Args:
            user_id: Client user ID
            year: Calendar year (defaults to the anchor date's year)
            now: Evaluation instant (defaults to the current local time)

        Returns:
            Result[PaymentScheduleResponseDTO]: Twelve obligations or an empty list
        """
        now = now or datetime.now()

        try:
            subscription = await self.subscription_repo.get_current_by_user_id(user_id)

            if not subscription or not subscription.plan:
                return Return.ok(PaymentScheduleResponseDTO(user_id=user_id))

            target_year = year or subscription.current_period_end.year
            schedule = build_schedule(
                subscription,
                subscription.plan,
                subscription.payments,
                now,
                year=target_year,
            )

            return Return.ok(
                PaymentScheduleResponseDTO(
                    user_id=user_id,
                    year=target_year,
                    payments=[self._to_dto(obligation) for obligation in schedule],
                )
            )

        except Exception as e:
            logger.error(f"Failed to build payment schedule for user {user_id}: {e}")
            return Return.err(
                Error(
                    code="PAYMENT_SCHEDULE_FAILED",
                    message="Failed to load client payments",
                    reason=str(e),
                )
            )

    def _to_dto(self, obligation: Obligation) -> ObligationDTO:
        return ObligationDTO(
            payment_id=obligation.matched_payment_id,
            due_date=obligation.due_date,
            amount_cents=obligation.amount_cents,
            status=obligation.status.value,
            paid_at=obligation.paid_at,
            provider=obligation.provider.value,
        )
