"""Get Financial Overview Use Case

Summarizes expected, received and pending amounts of the current month.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.reconciliation import compute_overview
from .dtos import FinancialOverviewResponseDTO

logger = logging.getLogger(__name__)


class GetFinancialOverview:
    """
    Use Case: Portfolio overview of the current month

    Every ACTIVE, PENDING or SUSPENDED subscription with a plan is expected
    to pay its plan price once per month.
    """

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[FinancialOverviewResponseDTO]:
        """
        Execute overview computation

        Args:
            now: Evaluation instant (defaults to the current local time)

        Returns:
            Result[FinancialOverviewResponseDTO]: Month totals in cents
        """
        now = now or datetime.now()

        try:
            subscriptions = await self.subscription_repo.get_billable_subscriptions()
            overview = compute_overview(subscriptions, now)

            return Return.ok(FinancialOverviewResponseDTO(**overview.model_dump()))

        except Exception as e:
            logger.error(f"Failed to compute financial overview: {e}")
            return Return.err(
                Error(
                    code="OVERVIEW_FAILED",
                    message="Failed to load financial overview",
                    reason=str(e),
                )
            )
