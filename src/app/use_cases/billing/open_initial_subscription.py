"""OpenInitialSubscription Use Case

Secondary step of client onboarding: opens the first subscription of a
client that was just created by the user layer.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.plan_repository import PlanRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.billing_dates import parse_flexible_date
from src.domain.subscription import Subscription, SubscriptionStatus
from .dtos import DueDateResponseDTO, InitialSubscriptionResponseDTO

logger = logging.getLogger(__name__)


class OpenInitialSubscription:
    """
    Use Case: Best-effort initial subscription

    The client record is the primary effect and is already committed by the
    caller. Any failure here is logged and reported in secondary_error; the
    result is always ok so the caller never reverses the client.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        plan_repo: PlanRepository,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.plan_repo = plan_repo

    async def execute(
        self,
        user_id: int,
        first_due_date: Optional[str],
        now: Optional[datetime] = None,
    ) -> Result[InitialSubscriptionResponseDTO]:
        """
        Execute initial subscription opening

        Args:
            user_id: Newly created client user ID
            first_due_date: First due date (DD/MM/YYYY or ISO); nothing is opened when absent
            now: Creation timestamp (defaults to the current local time)

        Returns:
            Result[InitialSubscriptionResponseDTO]: Always ok
        """
        if not first_due_date:
            return Return.ok(InitialSubscriptionResponseDTO(user_id=user_id))

        now = now or datetime.now()

        parsed = parse_flexible_date(first_due_date)
        if parsed is None:
            logger.warning(f"Initial subscription skipped for user {user_id}: invalid date {first_due_date}")
            return Return.ok(
                InitialSubscriptionResponseDTO(
                    user_id=user_id,
                    secondary_error=f"Invalid first due date: {first_due_date}",
                )
            )

        try:
            plan = await self.plan_repo.ensure_default_plan()
            subscription = await self.subscription_repo.create(
                Subscription(
                    user_id=user_id,
                    plan_id=plan.id,
                    status=SubscriptionStatus.ACTIVE,
                    current_period_end=parsed.date(),
                    created_at=now,
                    updated_at=now,
                )
            )
            await self.uow.commit()

            return Return.ok(
                InitialSubscriptionResponseDTO(
                    user_id=user_id,
                    subscription=DueDateResponseDTO(
                        subscription_id=subscription.id,
                        current_period_end=subscription.current_period_end,
                        created=True,
                    ),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to open initial subscription for user {user_id}: {e}")
            return Return.ok(
                InitialSubscriptionResponseDTO(
                    user_id=user_id,
                    secondary_error=f"Failed to open initial subscription: {e}",
                )
            )
