"""Notification Service Implementations

Provides concrete implementations for sending reconciliation reports.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.app.use_cases.billing.dtos import BillingReconciliationReportDTO

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs reports

    Useful for development and testing, or as a fallback.
    """

    async def send_reconciliation_report(
        self, report: BillingReconciliationReportDTO
    ) -> bool:
        """
        Log reconciliation report

        Args:
            report: Reconciliation report to log

        Returns:
            Always True (logging never fails)
        """
        overview = report.overview
        message = (
            f"[BILLING REPORT] {overview.year}-{overview.month:02d}: "
            f"expected={overview.expected_cents}, "
            f"received={overview.received_cents}, "
            f"pending={overview.pending_cents}, "
            f"subscriptions={report.subscriptions_checked}, "
            f"late={len(report.late_obligations)} ({report.late_cents} cents)"
        )
        if report.late_obligations:
            logger.warning(message)
        else:
            logger.info(message)
        return True


class WebhookNotificationService(NotificationService):
    """
    Notification service that sends reports via HTTP webhook

    Sends JSON payload to configured webhook URL.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST reports to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_reconciliation_report(
        self, report: BillingReconciliationReportDTO
    ) -> bool:
        """
        Send reconciliation report via webhook

        Args:
            report: Reconciliation report to deliver

        Returns:
            True if webhook call succeeded, False otherwise
        """
        payload = {
            "type": "billing_reconciliation_report",
            **report.model_dump(mode="json"),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(f"Reconciliation report sent to {self.webhook_url}")
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to send reconciliation report webhook: {e}")
            return False


class CompositeNotificationService(NotificationService):
    """
    Notification service that delegates to multiple services

    Useful for sending to multiple channels (e.g., log + webhook).
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_reconciliation_report(
        self, report: BillingReconciliationReportDTO
    ) -> bool:
        """
        Send report to all configured services

        Returns:
            True if at least one service succeeded, False otherwise
        """
        success = False
        for service in self.services:
            try:
                if await service.send_reconciliation_report(report):
                    success = True
            except Exception as e:
                logger.error(f"Notification service {type(service).__name__} failed: {e}")
        return success


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured NotificationService
    """
    services: list[NotificationService] = [LoggingNotificationService()]

    if webhook_url:
        services.append(WebhookNotificationService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeNotificationService(services)
