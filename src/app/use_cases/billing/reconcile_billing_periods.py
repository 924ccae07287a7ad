"""ReconcileBillingPeriods Use Case

Reconciles every billable subscription against its payments: current month
overview plus the past-due months of the current year.
"""

import logging
import time
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.obligation import ObligationStatus
from src.domain.reconciliation import compute_overview
from src.domain.schedule import build_schedule
from .dtos import (
    BillingReconciliationReportDTO,
    FinancialOverviewResponseDTO,
    LateObligationDTO,
)

logger = logging.getLogger(__name__)


class ReconcileBillingPeriods:
    """
    Use Case: Reconcile billing periods of the whole portfolio

    Business Rules:
    1. Retrieves all ACTIVE, PENDING and SUSPENDED subscriptions
    2. Computes the overview of now's month
    3. Builds each subscription's schedule for now's year and collects LATE months
       due on or after the subscription's creation day
    4. Does NOT modify any data (obligations are never persisted)
    """

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[BillingReconciliationReportDTO]:
        """
        Execute billing reconciliation

        Args:
            now: Evaluation instant (defaults to the current local time)

        Returns:
            Result[BillingReconciliationReportDTO]: Overview and late obligations
        """
        start_time = time.time()
        now = now or datetime.now()

        try:
            logger.info("Starting billing period reconciliation")

            subscriptions = await self.subscription_repo.get_billable_subscriptions()
            overview = compute_overview(subscriptions, now)

            late_obligations: list[LateObligationDTO] = []
            for subscription in subscriptions:
                schedule = build_schedule(
                    subscription, subscription.plan, subscription.payments, now, year=now.year
                )
                opened_on = subscription.created_at.date()
                for obligation in schedule:
                    # Months before the subscription existed were never billed
                    if obligation.due_date < opened_on:
                        continue
                    if obligation.status == ObligationStatus.LATE:
                        late_obligations.append(
                            LateObligationDTO(
                                subscription_id=subscription.id,
                                user_id=subscription.user_id,
                                due_date=obligation.due_date,
                                amount_cents=obligation.amount_cents,
                            )
                        )

            execution_time_ms = int((time.time() - start_time) * 1000)

            report = BillingReconciliationReportDTO(
                overview=FinancialOverviewResponseDTO(**overview.model_dump()),
                subscriptions_checked=len(subscriptions),
                late_obligations=late_obligations,
                late_cents=sum(o.amount_cents for o in late_obligations),
                reconciliation_time=now,
                execution_time_ms=execution_time_ms,
            )

            if late_obligations:
                logger.warning(
                    f"Reconciliation complete. Found {len(late_obligations)} late obligations "
                    f"out of {len(subscriptions)} subscriptions in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {len(subscriptions)} subscriptions up to date "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(report)

        except Exception as e:
            logger.error(f"Billing reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile billing periods",
                    reason=str(e),
                )
            )
