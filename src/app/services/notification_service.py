"""Notification Service Interface

Defines the contract for sending billing reconciliation reports.
"""

from abc import ABC, abstractmethod
from src.app.use_cases.billing.dtos import BillingReconciliationReportDTO


class NotificationService(ABC):
    """
    Abstract notification service for finance reports

    Implementations can send notifications via:
    - Logging
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_reconciliation_report(
        self, report: BillingReconciliationReportDTO
    ) -> bool:
        """
        Send the result of a billing reconciliation run

        Args:
            report: Reconciliation report to deliver

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
