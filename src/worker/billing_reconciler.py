"""Billing Reconciliation Background Worker

Periodically reconciles subscriptions against recorded payments and reports
the month overview and the late obligations.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.services.notification_service import create_notification_service
from src.app.use_cases.billing import ReconcileBillingPeriods, BillingReconciliationReportDTO
from src.domain.billing_dates import to_iso_date

logger = logging.getLogger(__name__)


class BillingReconcilerWorker:
    """
    Background worker for billing period reconciliation

    Features:
    - Computes the overview of the current month
    - Lists late obligations of the current year
    - Sends the report through the notification service (log, webhook)
    - Can run once or continuously

    Usage:
        # Run once
        worker = BillingReconcilerWorker()
        report = await worker.run_once()

        # Run continuously
        worker = BillingReconcilerWorker()
        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        webhook_url: Optional[str] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            webhook_url: Report webhook URL (defaults to config)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.webhook_url = webhook_url or ApplicationConfig.RECONCILIATION_NOTIFICATION_WEBHOOK

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        self.notification_service = create_notification_service(self.webhook_url)

        logger.info("BillingReconcilerWorker initialized")

    async def run_once(self, now: Optional[datetime] = None) -> Optional[BillingReconciliationReportDTO]:
        """
        Run reconciliation once

        Args:
            now: Evaluation instant (defaults to the current local time)

        Returns:
            Reconciliation report, or None when reconciliation is disabled

        Raises:
            RuntimeError: Reconciliation failed
        """
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Billing reconciliation is disabled, skipping")
            return None

        async with self.async_session_factory() as session:
            subscription_repo = SqlAlchemySubscriptionRepository(session)
            use_case = ReconcileBillingPeriods(subscription_repo=subscription_repo)

            result = await use_case.execute(now=now)

            if result.is_err():
                logger.error(f"Reconciliation failed: {result.error.message}")
                raise RuntimeError(f"Reconciliation failed: {result.error.message}")

            report = result.value

        for late in report.late_obligations:
            logger.warning(
                f"  - Subscription {late.subscription_id} (user_id={late.user_id}): "
                f"due {to_iso_date(late.due_date)}, {late.amount_cents} cents unpaid"
            )

        if not await self.notification_service.send_reconciliation_report(report):
            logger.error("Reconciliation report could not be delivered")

        return report

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run reconciliation continuously at specified interval

        Args:
            interval_seconds: Seconds between reconciliation runs (default: 24 hours)
        """
        logger.info(
            f"Starting continuous billing reconciliation with {interval_seconds}s interval"
        )

        while True:
            try:
                report = await self.run_once()
                if report is not None:
                    logger.info(
                        f"Reconciliation cycle complete. "
                        f"Checked {report.subscriptions_checked} subscriptions, "
                        f"found {len(report.late_obligations)} late obligations "
                        f"in {report.execution_time_ms}ms"
                    )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("BillingReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.billing_reconciler --once

        # Run continuously (default: RECONCILIATION_INTERVAL_SECONDS)
        python -m src.worker.billing_reconciler

        # Run continuously with custom interval (in seconds)
        python -m src.worker.billing_reconciler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Billing Reconciliation Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: RECONCILIATION_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = BillingReconcilerWorker()

    try:
        if args.once:
            report = await worker.run_once()
            if report is None:
                print("Billing reconciliation is disabled")
                return
            overview = report.overview
            print("Reconciliation complete:")
            print(f"  Month: {overview.year}-{overview.month:02d}")
            print(f"  Expected: {overview.expected_cents} cents")
            print(f"  Received: {overview.received_cents} cents")
            print(f"  Pending: {overview.pending_cents} cents")
            print(f"  Subscriptions checked: {report.subscriptions_checked}")
            print(f"  Late obligations: {len(report.late_obligations)} ({report.late_cents} cents)")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
