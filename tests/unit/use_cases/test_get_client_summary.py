"""Unit tests for GetClientSummary use case"""

import pytest
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.get_client_summary import GetClientSummary


@pytest.fixture
def mock_subscription_repo():
    return MagicMock()


@pytest.fixture
def mock_payment_repo():
    return MagicMock()


@pytest.fixture
def use_case(mock_subscription_repo, mock_payment_repo):
    return GetClientSummary(mock_subscription_repo, mock_payment_repo)


@pytest.mark.asyncio
class TestGetClientSummary:

    async def test_summary_with_last_payment(
        self, use_case, mock_subscription_repo, mock_payment_repo,
        make_plan, make_subscription, make_payment,
    ):
        mock_subscription_repo.get_current_by_user_id = AsyncMock(
            return_value=make_subscription(anchor=date(2026, 1, 5), plan=make_plan(price_cents=10000))
        )
        mock_payment_repo.get_latest_by_subscription_id = AsyncMock(
            return_value=make_payment(paid_at=datetime(2026, 3, 5, 12, 0))
        )

        result = await use_case.execute(42)

        assert result.is_ok()
        summary = result.value
        assert summary.plan_name == "Plano Mensal"
        assert summary.price_cents == 10000
        assert summary.subscription_status == "ACTIVE"
        assert summary.current_period_end == date(2026, 1, 5)
        assert summary.last_payment.status == "PAID"
        assert summary.last_payment.paid_at == datetime(2026, 3, 5, 12, 0)

    async def test_summary_without_payments(
        self, use_case, mock_subscription_repo, mock_payment_repo, make_plan, make_subscription
    ):
        mock_subscription_repo.get_current_by_user_id = AsyncMock(
            return_value=make_subscription(plan=make_plan())
        )
        mock_payment_repo.get_latest_by_subscription_id = AsyncMock(return_value=None)

        result = await use_case.execute(42)

        assert result.is_ok()
        assert result.value.last_payment is None

    async def test_user_without_subscription(self, use_case, mock_subscription_repo):
        mock_subscription_repo.get_current_by_user_id = AsyncMock(return_value=None)

        result = await use_case.execute(42)

        assert result.is_err()
        assert result.error.code == "SUBSCRIPTION_NOT_FOUND"
