"""UpdateDueDate Use Case

Moves the anchor due date of a client's current subscription, opening a
subscription on the default plan when the client has none.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.plan_repository import PlanRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.billing_dates import parse_flexible_date, to_iso_date
from src.domain.subscription import Subscription, SubscriptionStatus
from .dtos import UpdateDueDateCommandDTO, DueDateResponseDTO

logger = logging.getLogger(__name__)


class UpdateDueDate:
    """
    Use Case: Change the anchor due date of a client

    Business Rules:
    1. due_date accepts DD/MM/YYYY or ISO dates
    2. The current (most recently created) subscription is updated
    3. Without a subscription, an ACTIVE one is created on the default plan
       (PlanRepository.ensure_default_plan)
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
        self, command: UpdateDueDateCommandDTO, now: Optional[datetime] = None
    ) -> Result[DueDateResponseDTO]:
        """
        Execute due date update

        Args:
            command: UpdateDueDateCommandDTO with user_id and due_date
            now: Update timestamp (defaults to the current local time)

        Returns:
            Result[DueDateResponseDTO]: Subscription ID and new anchor date

        Errors:
            INVALID_DATE: due_date cannot be parsed
            DUE_DATE_UPDATE_FAILED: Persistence failure
        """
        now = now or datetime.now()

        parsed = parse_flexible_date(command.due_date)
        if parsed is None:
            return Return.err(
                Error(
                    code="INVALID_DATE",
                    message=f"Invalid due date: {command.due_date}",
                    reason="Expected DD/MM/YYYY or YYYY-MM-DD",
                )
            )

        try:
            subscription = await self.subscription_repo.get_current_by_user_id(command.user_id)
            created = subscription is None

            if subscription is None:
                plan = await self.plan_repo.ensure_default_plan()
                subscription = await self.subscription_repo.create(
                    Subscription(
                        user_id=command.user_id,
                        plan_id=plan.id,
                        status=SubscriptionStatus.ACTIVE,
                        current_period_end=parsed.date(),
                        created_at=now,
                        updated_at=now,
                    )
                )
            else:
                subscription.current_period_end = parsed.date()
                subscription.updated_at = now
                subscription = await self.subscription_repo.update(subscription)

            await self.uow.commit()

            logger.info(
                f"Due date of user {command.user_id} set to {to_iso_date(subscription.current_period_end)} "
                f"(subscription_id={subscription.id}, created={created})"
            )

            return Return.ok(
                DueDateResponseDTO(
                    subscription_id=subscription.id,
                    current_period_end=subscription.current_period_end,
                    created=created,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Due date update failed for user {command.user_id}: {e}")
            return Return.err(
                Error(
                    code="DUE_DATE_UPDATE_FAILED",
                    message="Failed to update due date",
                    reason=str(e),
                )
            )
