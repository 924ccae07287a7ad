"""Unit tests for reconciliation report notification services"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from src.app.use_cases.billing.dtos import (
    BillingReconciliationReportDTO,
    FinancialOverviewResponseDTO,
)


@pytest.fixture
def report():
    return BillingReconciliationReportDTO(
        overview=FinancialOverviewResponseDTO(
            month=3, year=2026, expected_cents=100, received_cents=100,
            pending_cents=0, active_subscriptions=1,
        ),
        subscriptions_checked=1,
        reconciliation_time=datetime(2026, 3, 20, 12, 0),
        execution_time_ms=5,
    )


def _mock_client(post):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.post = post
    return client


@pytest.mark.asyncio
class TestNotificationServices:

    async def test_logging_service_always_succeeds(self, report):
        assert await LoggingNotificationService().send_reconciliation_report(report) is True

    async def test_webhook_posts_json_report(self, report):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        post = AsyncMock(return_value=response)

        with patch(
            "src.adapter.services.notification_service.httpx.AsyncClient",
            return_value=_mock_client(post),
        ):
            sent = await WebhookNotificationService("https://hooks.example.com/billing") \
                .send_reconciliation_report(report)

        assert sent is True
        payload = post.await_args.kwargs["json"]
        assert payload["type"] == "billing_reconciliation_report"
        assert payload["overview"]["expected_cents"] == 100
        assert payload["reconciliation_time"] == "2026-03-20T12:00:00"

    async def test_webhook_http_error_returns_false(self, report):
        post = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with patch(
            "src.adapter.services.notification_service.httpx.AsyncClient",
            return_value=_mock_client(post),
        ):
            sent = await WebhookNotificationService("https://hooks.example.com/billing") \
                .send_reconciliation_report(report)

        assert sent is False

    async def test_composite_succeeds_if_any_service_succeeds(self, report):
        failing = MagicMock()
        failing.send_reconciliation_report = AsyncMock(side_effect=Exception("boom"))
        working = MagicMock()
        working.send_reconciliation_report = AsyncMock(return_value=True)

        service = CompositeNotificationService([failing, working])

        assert await service.send_reconciliation_report(report) is True


class TestNotificationServiceFactory:

    def test_factory(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)
        assert isinstance(
            create_notification_service("https://hooks.example.com/billing"),
            CompositeNotificationService,
        )
